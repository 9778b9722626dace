# tests/components/test_actions.py
import pytest

from circuitsim_core import (
    ComponentError, WaveformType, recharge_battery, repair_lamp, replace_fuse,
    set_switch, set_waveform, set_wiper, toggle_switch,
)


def test_replace_fuse_resets_heat_and_blown(make):
    f1 = make("fuse", "F1")
    f1.state.blown = True
    f1.state.heat_accumulated = 2.5
    replace_fuse(f1)

    assert not f1.state.blown
    assert f1.state.heat_accumulated == 0.0


def test_repair_lamp(make):
    lamp = make("lamp", "L1")
    lamp.state.broken = True
    repair_lamp(lamp)
    assert not lamp.state.broken


def test_recharge_battery_restores_emf(make):
    b1 = make("battery", "B1", nominal_voltage=9.0, capacity_mah=500.0, charge_remaining_mah=10.0)
    b1.state.voltage = 6.3
    recharge_battery(b1)

    assert b1.state.charge_remaining_mah == 500.0
    assert b1.state.charge_percent == 100.0
    assert b1.state.voltage == 9.0


def test_partial_recharge(make):
    b1 = make("battery", "B1", nominal_voltage=10.0, capacity_mah=200.0)
    recharge_battery(b1, percent=50.0)

    assert b1.state.charge_remaining_mah == 100.0
    assert b1.state.voltage == pytest.approx(7.0)
    with pytest.raises(ComponentError):
        recharge_battery(b1, percent=150.0)


def test_switch_actions(make):
    s1 = make("switch", "S1")
    assert toggle_switch(s1) is True
    assert s1.state.closed
    set_switch(s1, False)
    assert not s1.state.closed


@pytest.mark.parametrize("requested, applied", [(30.0, 30.0), (-5.0, 0.0), (250.0, 100.0)])
def test_set_wiper_clamps(make, requested, applied):
    pot = make("potentiometer", "P1")
    assert set_wiper(pot, requested) == applied
    assert pot.state.wiper_percent == applied


def test_set_waveform_updates_output_immediately(make):
    v1 = make("voltage_source", "V1", amplitude=5.0)
    config = set_waveform(v1, WaveformType.SQUARE, sim_time=0.0, frequency=10.0, duty_cycle=0.5)

    assert config.type is WaveformType.SQUARE
    assert config.frequency == 10.0
    assert v1.state.output_voltage == 5.0

    set_waveform(v1, amplitude=3.0, sim_time=0.06)
    assert v1.state.output_voltage == -3.0
    assert v1.state.waveform.frequency == 10.0


def test_set_waveform_rejects_unknown_settings(make):
    v1 = make("voltage_source", "V1")
    with pytest.raises(ComponentError, match="amplitud"):
        set_waveform(v1, amplitud=3.0)


@pytest.mark.parametrize("action", [replace_fuse, repair_lamp, recharge_battery, toggle_switch])
def test_actions_check_component_kind(make, action):
    r1 = make("resistor", "R1")
    with pytest.raises(ComponentError, match="applies to"):
        action(r1)
