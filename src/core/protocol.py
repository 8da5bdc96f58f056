"""Well-known D-Bus names used by the threshold monitor."""

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
PROPERTIES_CHANGED = "PropertiesChanged"
PROPERTIES_SET = "Set"

CRITICAL_THRESHOLD_INTERFACE = "xyz.openbmc_project.Sensor.Threshold.Critical"

CHASSIS_SERVICE = "xyz.openbmc_project.State.Chassis"
CHASSIS_OBJECT_PATH = "/xyz/openbmc_project/state/chassis0"
CHASSIS_INTERFACE = "xyz.openbmc_project.State.Chassis"
REQUESTED_POWER_TRANSITION = "RequestedPowerTransition"
TRANSITION_OFF = "xyz.openbmc_project.State.Chassis.Transition.Off"

LOCAL_INTERFACE = "org.freedesktop.DBus.Local"
DISCONNECTED = "Disconnected"
