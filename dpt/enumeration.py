"""DPT 20.x — 8-bit enumeration.

One byte holding the value of an enumeration element. Text form is the
element description; parsing also takes the value as numeral or the
description without spaces:

    "Comfort" ⇄ 0x01        "1" → 0x01        "BuildingProtection" → 0x04

A value that is no element of the enumeration is rejected on encode and
on decode.
"""

from typing import Any

from .descriptor import Enum8DPT
from .errors import DPTFormatError, DPTUsageError
from .numbers import decode_int
from .translator import Translator, sub_types

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

DPT_SCLO_MODE = Enum8DPT.of(
    "20.001", "SCLO Mode", {0: "autonomous", 1: "slave", 2: "master"}
)
DPT_BUILDING_MODE = Enum8DPT.of(
    "20.002",
    "Building Mode",
    {0: "Building in use", 1: "Building not used", 2: "Building protection"},
)
DPT_OCCUPANCY_MODE = Enum8DPT.of(
    "20.003", "Occupancy Mode", {0: "occupied", 1: "standby", 2: "not occupied"}
)
DPT_PRIORITY = Enum8DPT.of("20.004", "Priority", {0: "High", 1: "Medium", 2: "Low", 3: "void"})
DPT_LIGHT_APPLICATION_MODE = Enum8DPT.of(
    "20.005",
    "Light Application Mode",
    {0: "normal", 1: "presence simulation", 2: "night round"},
)
DPT_APPLICATION_AREA = Enum8DPT.of(
    "20.006",
    "Application Area",
    {
        0: "no fault",
        1: "system and functions of common interest",
        10: "HVAC general FBs",
        11: "HVAC Hot Water Heating",
        12: "HVAC Direct Electrical Heating",
        13: "HVAC Terminal Units",
        14: "HVAC VAC",
        20: "Lighting",
        30: "Security",
        40: "Load Management",
        50: "Shutters and blinds",
    },
)
DPT_ALARM_CLASS_TYPE = Enum8DPT.of(
    "20.007",
    "Alarm Class Type",
    {1: "simple alarm", 2: "basic alarm", 3: "extended alarm"},
)
DPT_PSU_MODE = Enum8DPT.of(
    "20.008",
    "PSU Mode",
    {
        0: "disabled (PSU/DPSU fixed off)",
        1: "enabled (PSU/DPSU fixed on)",
        2: "auto (PSU/DPSU automatic on/off)",
    },
)
DPT_ERROR_CLASS_SYSTEM = Enum8DPT.of(
    "20.011",
    "Error Class System",
    {
        0: "no fault",
        1: "general device fault (e.g., RAM, EEPROM, UI, watchdog)",
        2: "communication fault",
        3: "configuration fault",
        4: "hardware fault",
        5: "software fault",
        6: "insufficient non volatile memory",
        7: "insufficient volatile memory",
        8: "memory allocation command with size 0 received",
        9: "CRC error",
        10: "watchdog reset detected",
        11: "invalid opcode detected",
        12: "general protection fault",
        13: "maximal table length exceeded",
        14: "undefined load command received",
        15: "Group Address Table is not sorted",
        16: "invalid connection number (TSAP)",
        17: "invalid Group Object number (ASAP)",
        18: "Group Object Type exceeds (PID_MAX_APDU_LENGTH - 2)",
    },
)
DPT_ERROR_CLASS_HVAC = Enum8DPT.of(
    "20.012",
    "Error Class HVAC",
    {
        0: "no fault",
        1: "sensor fault",
        2: "process fault / controller fault",
        3: "actuator fault",
        4: "other fault",
    },
)
DPT_TIME_DELAY = Enum8DPT.of(
    "20.013",
    "Time Delay",
    {
        0: "not active",
        1: "1 s",
        2: "2 s",
        3: "3 s",
        4: "5 s",
        5: "10 s",
        6: "15 s",
        7: "20 s",
        8: "30 s",
        9: "45 s",
        10: "1 min",
        11: "1,25 min",
        12: "1,5 min",
        13: "2 min",
        14: "2,5 min",
        15: "3 min",
        16: "5 min",
        17: "15 min",
        18: "20 min",
        19: "30 min",
        20: "1 h",
        21: "2 h",
        22: "3 h",
        23: "5 h",
        24: "12 h",
        25: "24 h",
    },
)
DPT_BEAUFORT_WIND_FORCE_SCALE = Enum8DPT.of(
    "20.014",
    "Beaufort Wind Force Scale",
    {
        0: "calm (< 1.1 km/h)",
        1: "light air (1.1-5.5 km/h)",
        2: "light breeze (5.5-11.9 km/h)",
        3: "gentle breeze (11.9-19.7 km/h)",
        4: "moderate breeze (19.7-28.7 km/h)",
        5: "fresh breeze (28.7-38.8 km/h)",
        6: "strong breeze (38.8-49.9 km/h)",
        7: "near gale, moderate gale (49.9-61.8 km/h)",
        8: "gale, fresh gale (61.8-74.6 km/h)",
        9: "strong gale (74.6-88.1 km/h)",
        10: "storm (88.1-102.4 km/h)",
        11: "violent storm (102.4-117.4 km/h)",
        12: "hurricane (>= 117.4 km/h)",
    },
)
DPT_SENSOR_SELECT = Enum8DPT.of(
    "20.017",
    "Sensor Select",
    {
        0: "inactive",
        1: "digital input (not inverted)",
        2: "digital input inverted",
        3: "analog input, 0 % to 100 %",
        4: "temperature sensor input",
    },
)
DPT_ACTUATOR_CONNECT_TYPE = Enum8DPT.of(
    "20.020",
    "Actuator Connect Type",
    {1: "Sensor Connection", 2: "Controller Connection"},
)
DPT_FUEL_TYPE = Enum8DPT.of(
    "20.100", "Fuel Type", {0: "auto", 1: "oil", 2: "gas", 3: "solid state fuel"}
)
DPT_BURNER_TYPE = Enum8DPT.of(
    "20.101", "Burner Type", {1: "1 stage", 2: "2 stage", 3: "modulating"}
)
DPT_HVAC_MODE = Enum8DPT.of(
    "20.102",
    "HVAC Mode",
    {0: "Auto", 1: "Comfort", 2: "Standby", 3: "Economy", 4: "Building Protection"},
)
DPT_DHW_MODE = Enum8DPT.of(
    "20.103",
    "DHW Mode",
    {0: "Auto", 1: "Legio Protect", 2: "Normal", 3: "Reduced", 4: "Off / Frost Protect"},
)
DPT_LOAD_PRIORITY = Enum8DPT.of(
    "20.104",
    "Load Priority",
    {0: "None", 1: "Shift load priority", 2: "Absolute load priority"},
)
DPT_HVAC_CONTROL_MODE = Enum8DPT.of(
    "20.105",
    "HVAC Control Mode",
    {
        0: "Auto",
        1: "Heat",
        2: "Morning Warmup",
        3: "Cool",
        4: "Night Purge",
        5: "Precool",
        6: "Off",
        7: "Test",
        8: "Emergency Heat",
        9: "Fan Only",
        10: "Free Cool",
        11: "Ice",
        12: "Maximum Heating Mode",
        13: "Economic Heat/Cool Mode",
        14: "Dehumidification",
        15: "Calibration Mode",
        16: "Emergency Cool Mode",
        17: "Emergency Steam Mode",
        20: "NoDem",
    },
)
DPT_HVAC_EMERGENCY_MODE = Enum8DPT.of(
    "20.106",
    "HVAC Emergency Mode",
    {
        0: "Normal",
        1: "Emergency Pressure",
        2: "Emergency Depressure",
        3: "Emergency Purge",
        4: "Emergency Shutdown",
        5: "Emergency Fire",
    },
)
DPT_CHANGEOVER_MODE = Enum8DPT.of(
    "20.107", "Changeover Mode", {0: "Auto", 1: "Cooling Only", 2: "Heating Only"}
)
DPT_VALVE_MODE = Enum8DPT.of(
    "20.108",
    "Valve Mode",
    {
        1: "Heat stage A for normal heating",
        2: "Heat stage B for heating with two stages (A + B)",
        3: "Cool stage A for normal cooling",
        4: "Cool stage B for cooling with two stages (A + B)",
        5: "Heat/Cool for changeover applications",
    },
)
DPT_DAMPER_MODE = Enum8DPT.of(
    "20.109",
    "Damper Mode",
    {
        1: "Fresh air, e.g., fancoils",
        2: "Supply Air, e.g. Variable Air Volume (VAV)",
        3: "Extract Air, e.g. Variable Air Volume (VAV)",
        4: "Extract Air 2, e.g. Variable Air Volume (VAV)",
    },
)
DPT_HEATER_MODE = Enum8DPT.of(
    "20.110",
    "Heater Mode",
    {1: "Heat Stage A On/Off", 2: "Heat Stage A Proportional", 3: "Heat Stage B Proportional"},
)
DPT_FAN_MODE = Enum8DPT.of(
    "20.111",
    "Fan Mode",
    {0: "not running", 1: "permanently running", 2: "running in intervals"},
)
DPT_MASTER_SLAVE_MODE = Enum8DPT.of(
    "20.112", "Master/Slave Mode", {0: "autonomous", 1: "master", 2: "slave"}
)
DPT_STATUS_ROOM_SETPOINT = Enum8DPT.of(
    "20.113",
    "Status Room Setpoint",
    {0: "normal setpoint", 1: "alternative setpoint", 2: "building protection setpoint"},
)
DPT_METERING_DEVICE_TYPE = Enum8DPT.of(
    "20.114",
    "Metering Device Type",
    {
        0: "Other device type",
        1: "Oil meter",
        2: "Electricity meter",
        3: "Gas meter",
        4: "Heat meter",
        5: "Steam meter",
        6: "Warm Water meter",
        7: "Water meter",
        8: "Heat cost allocator",
        10: "Cooling Load meter (outlet)",
        11: "Cooling Load meter (inlet)",
        12: "Heat (inlet)",
        13: "Heat and Cool",
        32: "breaker (electricity)",
        33: "valve (gas or water)",
        40: "waste water meter",
        41: "garbage",
        255: "void device type",
    },
)
DPT_ADA_TYPE = Enum8DPT.of("20.120", "ADA Type", {1: "Air Damper", 2: "VAV"})
DPT_BACKUP_MODE = Enum8DPT.of("20.121", "Backup Mode", {0: "Backup Value", 1: "Keep Last State"})
DPT_START_SYNCHRONIZATION = Enum8DPT.of(
    "20.122",
    "Start Synchronization",
    {0: "Position unchanged", 1: "Single close", 2: "Single open"},
)
DPT_BEHAVIOUR_LOCK_UNLOCK = Enum8DPT.of(
    "20.600",
    "Behaviour Lock/Unlock",
    {
        0: "off",
        1: "on",
        2: "no change",
        3: "value according additional parameter",
        4: "memory function value",
        5: "updated value",
        6: "value before locking",
    },
)
DPT_BEHAVIOUR_BUS_POWER_UP_DOWN = Enum8DPT.of(
    "20.601",
    "Behaviour Bus Power Up/Down",
    {
        0: "off",
        1: "on",
        2: "no change",
        3: "value according additional parameter",
        4: "last (value before bus power down)",
    },
)
DPT_DALI_FADE_TIME = Enum8DPT.of(
    "20.602",
    "DALI Fade Time",
    {
        0: "0 s (no fade)",
        1: "0,7 s",
        2: "1,0 s",
        3: "1,4 s",
        4: "2,0 s",
        5: "2,8 s",
        6: "4,0 s",
        7: "5,7 s",
        8: "8,0 s",
        9: "11,3 s",
        10: "16,0 s",
        11: "22,6 s",
        12: "32,0 s",
        13: "45,3 s",
        14: "64,0 s",
        15: "90,5 s",
    },
)
DPT_BLINKING_MODE = Enum8DPT.of(
    "20.603",
    "Blinking Mode",
    {0: "Blinking Disabled", 1: "Without Acknowledge", 2: "Blinking With Acknowledge"},
)
DPT_LIGHT_CONTROL_MODE = Enum8DPT.of(
    "20.604",
    "Light Control Mode",
    {0: "automatic light control", 1: "manual light control"},
)
DPT_SWITCH_PB_MODEL = Enum8DPT.of(
    "20.605",
    "Switch PB Model",
    {1: "one PB/binary input mode", 2: "two PBs/binary inputs mode"},
)
DPT_PB_ACTION = Enum8DPT.of(
    "20.606",
    "PB Action",
    {
        0: "inactive (no message sent)",
        1: "Switch-Off message sent",
        2: "Switch-On message sent",
        3: "inverse value of Info On/Off is sent",
    },
)
DPT_DIMM_PB_MODEL = Enum8DPT.of(
    "20.607",
    "Dimm PB Model",
    {
        1: "one push-button/binary input, Switch On/Off inverts on each transmission",
        2: "one push-button/binary input, On/Dim-Up message sent",
        3: "one push-button/binary input, Off/Dim-Down message sent",
        4: "two push-buttons/binary inputs mode",
    },
)
DPT_SWITCH_ON_MODE = Enum8DPT.of(
    "20.608",
    "Switch On Mode",
    {
        0: "last actual value",
        1: "value according additional parameter",
        2: "last received absolute setvalue",
    },
)
DPT_LOAD_TYPE_SET = Enum8DPT.of(
    "20.609",
    "Load Type Set",
    {
        0: "automatic",
        1: "leading edge (inductive load)",
        2: "trailing edge (capacitive load)",
    },
)
DPT_LOAD_TYPE_DETECTED = Enum8DPT.of(
    "20.610",
    "Load Type Detected",
    {
        0: "undefined",
        1: "leading edge (inductive load)",
        2: "trailing edge (capacitive load)",
        3: "detection not possible or error",
    },
)
DPT_SAB_EXCEPT_BEHAVIOUR = Enum8DPT.of(
    "20.801",
    "SAB Except Behaviour",
    {0: "up", 1: "down", 2: "no change", 3: "value according additional parameter", 4: "stop"},
)
DPT_SAB_BEHAVIOUR_LOCK_UNLOCK = Enum8DPT.of(
    "20.802",
    "SAB Behaviour Lock/Unlock",
    {
        0: "up",
        1: "down",
        2: "no change",
        3: "value according additional parameter",
        4: "stop",
        5: "updated value",
        6: "value before locking",
    },
)
DPT_SSSB_MODE = Enum8DPT.of(
    "20.803",
    "SSSB Mode",
    {
        1: "one push button/binary input: Move-Up/Down inverts on each transmission",
        2: "one push button/binary input: Move-Up/Step-Up message sent",
        3: "one push button/binary input: Move-Down/Step-Down message sent",
        4: "two push buttons/binary inputs mode",
    },
)
DPT_BLINDS_CONTROL_MODE = Enum8DPT.of(
    "20.804", "Blinds Control Mode", {0: "Automatic Control", 1: "Manual Control"}
)
DPT_COMM_MODE = Enum8DPT.of(
    "20.1000",
    "Communication Mode",
    {
        0: "Data link layer",
        1: "Data link layer busmonitor",
        2: "Data link layer raw frames",
        6: "cEMI transport layer",
        255: "no layer",
    },
)


# ---------------------------------------------------------------------------
# Translator
# ---------------------------------------------------------------------------


class EightBitEnumTranslator(Translator):
    MAIN_NUMBER = 20
    DESCRIPTION = "8-Bit Enumeration"
    TYPE_SIZE = 1
    SUB_TYPES = sub_types(
        DPT_SCLO_MODE,
        DPT_BUILDING_MODE,
        DPT_OCCUPANCY_MODE,
        DPT_PRIORITY,
        DPT_LIGHT_APPLICATION_MODE,
        DPT_APPLICATION_AREA,
        DPT_ALARM_CLASS_TYPE,
        DPT_PSU_MODE,
        DPT_ERROR_CLASS_SYSTEM,
        DPT_ERROR_CLASS_HVAC,
        DPT_TIME_DELAY,
        DPT_BEAUFORT_WIND_FORCE_SCALE,
        DPT_SENSOR_SELECT,
        DPT_ACTUATOR_CONNECT_TYPE,
        DPT_FUEL_TYPE,
        DPT_BURNER_TYPE,
        DPT_HVAC_MODE,
        DPT_DHW_MODE,
        DPT_LOAD_PRIORITY,
        DPT_HVAC_CONTROL_MODE,
        DPT_HVAC_EMERGENCY_MODE,
        DPT_CHANGEOVER_MODE,
        DPT_VALVE_MODE,
        DPT_DAMPER_MODE,
        DPT_HEATER_MODE,
        DPT_FAN_MODE,
        DPT_MASTER_SLAVE_MODE,
        DPT_STATUS_ROOM_SETPOINT,
        DPT_METERING_DEVICE_TYPE,
        DPT_ADA_TYPE,
        DPT_BACKUP_MODE,
        DPT_START_SYNCHRONIZATION,
        DPT_BEHAVIOUR_LOCK_UNLOCK,
        DPT_BEHAVIOUR_BUS_POWER_UP_DOWN,
        DPT_DALI_FADE_TIME,
        DPT_BLINKING_MODE,
        DPT_LIGHT_CONTROL_MODE,
        DPT_SWITCH_PB_MODEL,
        DPT_PB_ACTION,
        DPT_DIMM_PB_MODEL,
        DPT_SWITCH_ON_MODE,
        DPT_LOAD_TYPE_SET,
        DPT_LOAD_TYPE_DETECTED,
        DPT_SAB_EXCEPT_BEHAVIOUR,
        DPT_SAB_BEHAVIOUR_LOCK_UNLOCK,
        DPT_SSSB_MODE,
        DPT_BLINDS_CONTROL_MODE,
        DPT_COMM_MODE,
    )

    def _initial_record(self) -> bytearray:
        return bytearray([self.dpt.first_value])

    def set_element(self, element: int) -> None:
        """Set the first item to an element value of the enumeration."""
        if not self.dpt.contains(element):
            raise DPTUsageError(f"{element} is no element of {self.dpt.description}")
        self._data = bytearray([element])

    @property
    def element(self) -> int:
        return self._data[0]

    def numeric_value(self) -> int:
        return self._data[0]

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            element = self._parse(value)
        elif isinstance(value, int):
            element = value
            if not int(self.dpt.lower) <= element <= int(self.dpt.upper):
                raise self._range_error(value)
            if not self.dpt.contains(element):
                raise self._error(
                    f"value is no element of {self.dpt.description} enumeration", value
                )
        else:
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value {value!r}")
        dst[index] = element

    def _parse(self, text: str) -> int:
        try:
            element = decode_int(text)
        except ValueError:
            element = self.dpt.find(text)
            if element is None:
                raise self._error(
                    f"value is no element of {self.dpt.description} enumeration", text
                ) from None
            return element
        if not self.dpt.contains(element):
            raise self._error(f"value is no element of {self.dpt.description} enumeration", text)
        return element

    def _from_dpt(self, index: int) -> str:
        return self.dpt.text_of(self._data[index])

    def _check_item(self, buf: bytearray, index: int) -> None:
        if not self.dpt.contains(buf[index]):
            raise DPTFormatError(
                f"{self._prefix()}value {buf[index]} is no element of the enumeration",
                str(buf[index]),
            )
