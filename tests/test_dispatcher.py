import logging

import pytest

from core.entities import ActionDescriptor, AssertionResult
from services.dispatcher import ActionDispatcher
from support import RecordingCaller


def test_default_action_requests_chassis_power_off() -> None:
    action = ActionDescriptor()

    assert action.service == "xyz.openbmc_project.State.Chassis"
    assert action.object_path == "/xyz/openbmc_project/state/chassis0"
    assert action.method_interface == "org.freedesktop.DBus.Properties"
    assert action.method == "Set"
    assert action.signature == "ssv"
    assert action.arguments() == (
        "xyz.openbmc_project.State.Chassis",
        "RequestedPowerTransition",
        "xyz.openbmc_project.State.Chassis.Transition.Off",
    )


def test_trigger_sends_same_action_for_every_sensor(caller) -> None:
    dispatcher = ActionDispatcher(caller, ActionDescriptor())

    assert dispatcher.trigger("/sensors/temperature/Temp1", "CriticalAlarmHigh")
    assert dispatcher.dispatch(AssertionResult("/sensors/voltage/P12V", "CriticalAlarmLow"))

    assert caller.calls == [ActionDescriptor(), ActionDescriptor()]


def test_trigger_logs_notice_before_calling(caplog) -> None:
    caller = RecordingCaller()
    dispatcher = ActionDispatcher(caller, ActionDescriptor())

    with caplog.at_level(logging.INFO, logger="monitor.dispatcher"):
        dispatcher.trigger("/sensors/temperature/Temp1", "CriticalAlarmLow")

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "Sensor /sensors/temperature/Temp1 asserted CriticalAlarmLow!"
    assert not any("Failed" in message for message in messages)


def test_trigger_failure_is_logged_and_not_retried(caplog) -> None:
    caller = RecordingCaller(fail=True)
    dispatcher = ActionDispatcher(caller, ActionDescriptor(value="xyz.openbmc_project.State.Chassis.Transition.On"))

    with caplog.at_level(logging.WARNING, logger="monitor.dispatcher"):
        assert dispatcher.trigger("/sensors/temperature/Temp1", "CriticalAlarmHigh") is False

    assert len(caller.calls) == 1
    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "Transition.On" in errors[0].getMessage()


def test_call_shape_is_not_configurable() -> None:
    with pytest.raises(TypeError):
        ActionDescriptor(method="Reboot")
    with pytest.raises(TypeError):
        ActionDescriptor(signature="s")

    action = ActionDescriptor(value="xyz.openbmc_project.State.Chassis.Transition.PowerCycle")
    assert (action.method_interface, action.method, action.signature) == (
        "org.freedesktop.DBus.Properties",
        "Set",
        "ssv",
    )
