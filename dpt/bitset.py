"""Bit set DPTs — 21.x (8 bit) and 22.x (16 bit).

Every bit names one element of the subtype; element n is bit 1 << n.
Encode accepts, in this order:

  - one numeral (decimal, 0x/# hex, 0 octal):        "0x21"
  - 0/1/true/false flags, most significant first:    "1 0 1 0 0 0"
  - element names or their friendly rendering:       "Fault, In Alarm"

Decode renders the set elements as friendly names, highest bit first,
joined by ", ".
"""

import struct
from typing import Any, Iterable

from .descriptor import EnumDPT
from .errors import DPTUsageError
from .numbers import decode_int
from .translator import Translator, sub_types

RHCC_COOLING_MODE = "Cooling Mode"

_ONE = ("1", "true")
_ZERO = ("0", "false")


class _BitSetTranslator(Translator):
    STRUCT = struct.Struct("!B")

    # ------------------------------------------------------------------
    # Typed access (first item)
    # ------------------------------------------------------------------

    def numeric_value(self) -> int:
        return self._raw(0)

    def set_elements(self, names: Iterable[str]) -> None:
        buf = bytearray(self.TYPE_SIZE)
        self._to_dpt(list(names), buf, 0)
        self._data = buf

    def elements(self) -> list[str]:
        """Names of the elements set in the first item, lowest bit first."""
        value = self._raw(0)
        return [name for name, bit in self.dpt.elements if value & (1 << bit)]

    def contains(self, name: str) -> bool:
        bit = self.dpt.find(name)
        if bit is None:
            raise DPTUsageError(f"{name} is no element of {self.dpt.description}")
        return bool(self._raw(0) & (1 << bit))

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            result = self._parse(value)
        elif isinstance(value, int):
            result = value
        else:
            result = self._bits_of(value)
        self._validate(result)
        self.STRUCT.pack_into(dst, index * self.TYPE_SIZE, result)

    def _parse(self, text: str) -> int:
        try:
            return decode_int(text)
        except ValueError:
            pass

        s = text.strip()
        if not s:
            return 0
        if "," in s:
            tokens = s.split(",")
        elif self.dpt.find(s) is not None or self._is_empty_label(s):
            tokens = [s]
        else:
            tokens = s.split()

        size = len(self.dpt.elements)
        result = 0
        for i, token in enumerate(reversed(tokens)):
            token = token.strip()
            flag = token.lower()
            if flag in _ONE or flag in _ZERO:
                if i >= size:
                    raise self._error(f"more flags than elements in {self.dpt.description}", text)
                if flag in _ONE:
                    result |= 1 << i
                continue
            if self._is_empty_label(token):
                continue
            bit = self.dpt.find(token)
            if bit is None:
                raise self._error(f"value is no element of {self.dpt.description}", token)
            result |= 1 << bit
        return result

    def _bits_of(self, names: Iterable[str]) -> int:
        result = 0
        for name in names:
            bit = self.dpt.find(name)
            if bit is None:
                raise DPTUsageError(f"{name} is no element of {self.dpt.description}")
            result |= 1 << bit
        return result

    def _validate(self, value: int) -> None:
        if not 0 <= value <= self.dpt.max_value:
            raise self._range_error(value)

    def _is_empty_label(self, text: str) -> bool:
        return False

    def _raw(self, index: int) -> int:
        return self.STRUCT.unpack_from(self._data, index * self.TYPE_SIZE)[0]

    def _from_dpt(self, index: int) -> str:
        value = self._raw(index)
        names = [
            self.dpt.text_of(bit)
            for bit in range(len(self.dpt.elements) - 1, -1, -1)
            if value & (1 << bit)
        ]
        return ", ".join(names)

    def _check_item(self, buf: bytearray, index: int) -> None:
        self._validate(self.STRUCT.unpack_from(buf, index * self.TYPE_SIZE)[0])


# ---------------------------------------------------------------------------
# 21.x — 8 bit set
# ---------------------------------------------------------------------------

DPT_GENERAL_STATUS = EnumDPT.of(
    "21.001", "GeneralStatus", ["OutOfService", "Fault", "Overridden", "InAlarm", "AlarmUnAck"]
)
DPT_DEVICE_CONTROL = EnumDPT.of(
    "21.002", "DeviceControl", ["UserStopped", "OwnIndAddress", "VerifyMode"]
)
DPT_FORCING_SIGNAL = EnumDPT.of(
    "21.100",
    "ForcingSignal",
    [
        "ForceRequest",
        "Protection",
        "Oversupply",
        "Overrun",
        "DhwNorm",
        "DhwLegio",
        "RoomHeatingComfort",
        "RoomHeatingMax",
    ],
)
DPT_FORCING_SIGNAL_COOL = EnumDPT.of("21.101", "ForcingSignalCool", ["ForceRequest"])
DPT_ROOM_HEATING_CONTROLLER_STATUS = EnumDPT.of(
    "21.102",
    "RoomHeatingControllerStatus",
    [
        "Fault",
        "EcoMode",
        "FlowTempLimit",
        "ReturnTempLimit",
        "MorningBoost",
        "StartOptimization",
        "StopOptimization",
        "SummerMode",
    ],
)
DPT_SOLAR_DHW_CONTROLLER_STATUS = EnumDPT.of(
    "21.103", "SolarDhwControllerStatus", ["Fault", "SolarDhwLoadActive", "SolarLoadSufficient"]
)
DPT_FUEL_TYPE_SET = EnumDPT.of("21.104", "FuelTypeSet", ["Oil", "Gas", "SolidState"])
DPT_ROOM_COOLING_CONTROLLER_STATUS = EnumDPT.of("21.105", "RoomCoolingControllerStatus", ["Fault"])
DPT_VENTILATION_CONTROLLER_STATUS = EnumDPT.of(
    "21.106", "VentilationControllerStatus", ["Fault", "FanActive", "Heat", "Cool"]
)
DPT_LIGHT_ACTUATOR_ERROR_INFO = EnumDPT.of(
    "21.601",
    "LightActuatorErrorInfo",
    [
        "LoadDetectionFailed",
        "Undervoltage",
        "Overcurrent",
        "Underload",
        "DefectiveLoad",
        "LampFailure",
        "Overheat",
    ],
)
DPT_RF_COMM_MODE_INFO = EnumDPT.of(
    "21.1000", "RFCommModeInfo", ["Asynchronous", "BiBatMaster", "BiBatSlave"]
)
DPT_RF_FILTER_INFO = EnumDPT.of(
    "21.1001", "RFFilterModes", ["DomainAddress", "SerialNumber", "DoAAndSN"]
)
DPT_CHANNEL_ACTIVATION = EnumDPT.of(
    "21.1010", "ChannelActivationState", [f"Channel{n}" for n in range(1, 9)]
)


class EightBitSetTranslator(_BitSetTranslator):
    MAIN_NUMBER = 21
    DESCRIPTION = "8-Bit Set"
    TYPE_SIZE = 1
    STRUCT = struct.Struct("!B")
    SUB_TYPES = sub_types(
        DPT_GENERAL_STATUS,
        DPT_DEVICE_CONTROL,
        DPT_FORCING_SIGNAL,
        DPT_FORCING_SIGNAL_COOL,
        DPT_ROOM_HEATING_CONTROLLER_STATUS,
        DPT_SOLAR_DHW_CONTROLLER_STATUS,
        DPT_FUEL_TYPE_SET,
        DPT_ROOM_COOLING_CONTROLLER_STATUS,
        DPT_VENTILATION_CONTROLLER_STATUS,
        DPT_LIGHT_ACTUATOR_ERROR_INFO,
        DPT_RF_COMM_MODE_INFO,
        DPT_RF_FILTER_INFO,
        DPT_CHANNEL_ACTIVATION,
    )


# ---------------------------------------------------------------------------
# 22.x — 16 bit set
# ---------------------------------------------------------------------------

DPT_DHW_CONTROLLER_STATUS = EnumDPT.of(
    "22.100",
    "DhwControllerStatus",
    [
        "Fault",
        "LoadActive",
        "LegionellaProtActive",
        "PushActive",
        "OtherEnergySourceActive",
        "SolarEnergyOnly",
        "SolarEnergySupport",
        "TemperatureSetpointReached",
    ],
)
DPT_RHCC_STATUS = EnumDPT.of(
    "22.101",
    "RhccStatus",
    [
        "Fault",
        "HeatingEcoMode",
        "LimitFlowTemperature",
        "LimitReturnTemperature",
        "HeatingMorningBoost",
        "EarlyMorningStart",
        "EarlyEveningShutdown",
        "HeatingDisabled",
        "HeatingMode",
        "CoolingEcoMode",
        "PreCoolingMode",
        "CoolingDisabled",
        "DewPointAlarm",
        "FrostAlarm",
        "OverheatAlarm",
    ],
)
DPT_MEDIA = EnumDPT.of("22.1000", "Medium", ["_0", "TP1", "PL110", "_3", "RF", "Knxip"])


class SixteenBitSetTranslator(_BitSetTranslator):
    MAIN_NUMBER = 22
    DESCRIPTION = "16-Bit Set"
    TYPE_SIZE = 2
    STRUCT = struct.Struct("!H")
    SUB_TYPES = sub_types(DPT_DHW_CONTROLLER_STATUS, DPT_RHCC_STATUS, DPT_MEDIA)

    def _is_empty_label(self, text: str) -> bool:
        # RHCC controller with neither heating mode nor cooling disabled
        return self.dpt.id == DPT_RHCC_STATUS.id and text == RHCC_COOLING_MODE

    def _from_dpt(self, index: int) -> str:
        text = super()._from_dpt(index)
        if not text and self.dpt.id == DPT_RHCC_STATUS.id:
            return RHCC_COOLING_MODE
        return text
