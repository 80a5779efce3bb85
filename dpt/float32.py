"""DPT 14.x — 4-byte IEEE 754 single precision float."""

import math
import struct
from typing import Any, Union

from .descriptor import DPT
from .errors import DPTUsageError
from .numbers import parse_decimal
from .translator import Translator, sub_types

_F32 = struct.Struct("!f")
_F32_MIN, _F32_MAX = "-3.40282347e+38", "3.40282347e+38"

DPT_ACCELERATION = DPT("14.000", "Acceleration", _F32_MIN, _F32_MAX, "ms⁻²")
DPT_ACCELERATION_ANGULAR = DPT("14.001", "Acceleration, angular", _F32_MIN, _F32_MAX, "rad s⁻²")
DPT_ACTIVATION_ENERGY = DPT("14.002", "Activation energy", _F32_MIN, _F32_MAX, "J/mol")
DPT_ACTIVITY = DPT("14.003", "Activity", _F32_MIN, _F32_MAX, "s⁻¹")
DPT_MOL = DPT("14.004", "Mol", _F32_MIN, _F32_MAX, "mol")
DPT_AMPLITUDE = DPT("14.005", "Amplitude", _F32_MIN, _F32_MAX)
DPT_ANGLE_RAD = DPT("14.006", "Angle", _F32_MIN, _F32_MAX, "rad")
DPT_ANGLE_DEG = DPT("14.007", "Angle", _F32_MIN, _F32_MAX, "°")
DPT_ANGULAR_MOMENTUM = DPT("14.008", "Momentum", _F32_MIN, _F32_MAX, "Js")
DPT_ANGULAR_VELOCITY = DPT("14.009", "Angular velocity", _F32_MIN, _F32_MAX, "rad/s")
DPT_AREA = DPT("14.010", "Area", _F32_MIN, _F32_MAX, "m²")
DPT_CAPACITANCE = DPT("14.011", "Capacitance", _F32_MIN, _F32_MAX, "F")
DPT_CHARGE_DENSITY_SURFACE = DPT(
    "14.012", "Charge density (surface)", _F32_MIN, _F32_MAX, "C m⁻²"
)
DPT_CHARGE_DENSITY_VOLUME = DPT("14.013", "Charge density (volume)", _F32_MIN, _F32_MAX, "C m⁻³")
DPT_COMPRESSIBILITY = DPT("14.014", "Compressibility", _F32_MIN, _F32_MAX, "m²/N")
DPT_CONDUCTANCE = DPT("14.015", "Conductance", _F32_MIN, _F32_MAX, "Ω⁻¹")
DPT_ELECTRICAL_CONDUCTIVITY = DPT(
    "14.016", "Conductivity, electrical", _F32_MIN, _F32_MAX, "Ω⁻¹m⁻¹"
)
DPT_DENSITY = DPT("14.017", "Density", _F32_MIN, _F32_MAX, "kg m⁻³")
DPT_ELECTRIC_CHARGE = DPT("14.018", "Electric charge", _F32_MIN, _F32_MAX, "C")
DPT_ELECTRIC_CURRENT = DPT("14.019", "Electric current", _F32_MIN, _F32_MAX, "A")
DPT_ELECTRIC_CURRENTDENSITY = DPT(
    "14.020", "Electric current density", _F32_MIN, _F32_MAX, "A m⁻²"
)
DPT_ELECTRIC_DIPOLEMOMENT = DPT("14.021", "Electric dipole moment", _F32_MIN, _F32_MAX, "Cm")
DPT_ELECTRIC_DISPLACEMENT = DPT("14.022", "Electric displacement", _F32_MIN, _F32_MAX, "C m⁻²")
DPT_ELECTRIC_FIELDSTRENGTH = DPT("14.023", "Electric field strength", _F32_MIN, _F32_MAX, "V/m")
DPT_ELECTRIC_FLUX = DPT("14.024", "Electric flux", _F32_MIN, _F32_MAX, "Vm")
DPT_ELECTRIC_FLUX_DENSITY = DPT("14.025", "Electric flux density", _F32_MIN, _F32_MAX, "C m⁻²")
DPT_ELECTRIC_POLARIZATION = DPT("14.026", "Electric polarization", _F32_MIN, _F32_MAX, "C m⁻²")
DPT_ELECTRIC_POTENTIAL = DPT("14.027", "Electric potential", _F32_MIN, _F32_MAX, "V")
DPT_ELECTRIC_POTENTIAL_DIFFERENCE = DPT(
    "14.028", "Electric potential difference", _F32_MIN, _F32_MAX, "V"
)
DPT_ELECTROMAGNETIC_MOMENT = DPT("14.029", "Electromagnetic moment", _F32_MIN, _F32_MAX, "A m²")
DPT_ELECTROMOTIVE_FORCE = DPT("14.030", "Electromotive force", _F32_MIN, _F32_MAX, "V")
DPT_ENERGY = DPT("14.031", "Energy", _F32_MIN, _F32_MAX, "J")
DPT_FORCE = DPT("14.032", "Force", _F32_MIN, _F32_MAX, "N")
DPT_FREQUENCY = DPT("14.033", "Frequency", _F32_MIN, _F32_MAX, "Hz")
DPT_ANGULAR_FREQUENCY = DPT("14.034", "Frequency, angular", _F32_MIN, _F32_MAX, "rad/s")
DPT_HEAT_CAPACITY = DPT("14.035", "Heat capacity", _F32_MIN, _F32_MAX, "J/K")
DPT_HEAT_FLOWRATE = DPT("14.036", "Heat flow rate", _F32_MIN, _F32_MAX, "W")
DPT_HEAT_QUANTITY = DPT("14.037", "Heat quantity", _F32_MIN, _F32_MAX, "J")
DPT_IMPEDANCE = DPT("14.038", "Impedance", _F32_MIN, _F32_MAX, "Ω")
DPT_LENGTH = DPT("14.039", "Length", _F32_MIN, _F32_MAX, "m")
DPT_LIGHT_QUANTITY = DPT("14.040", "Quantity of Light", _F32_MIN, _F32_MAX, "J")
DPT_LUMINANCE = DPT("14.041", "Luminance", _F32_MIN, _F32_MAX, "cd m⁻²")
DPT_LUMINOUS_FLUX = DPT("14.042", "Luminous flux", _F32_MIN, _F32_MAX, "lm")
DPT_LUMINOUS_INTENSITY = DPT("14.043", "Luminous intensity", _F32_MIN, _F32_MAX, "cd")
DPT_MAGNETIC_FIELDSTRENGTH = DPT("14.044", "Magnetic field strength", _F32_MIN, _F32_MAX, "A/m")
DPT_MAGNETIC_FLUX = DPT("14.045", "Magnetic flux", _F32_MIN, _F32_MAX, "Wb")
DPT_MAGNETIC_FLUX_DENSITY = DPT("14.046", "Magnetic flux density", _F32_MIN, _F32_MAX, "T")
DPT_MAGNETIC_MOMENT = DPT("14.047", "Magnetic moment", _F32_MIN, _F32_MAX, "A m²")
DPT_MAGNETIC_POLARIZATION = DPT("14.048", "Magnetic polarization", _F32_MIN, _F32_MAX, "T")
DPT_MAGNETIZATION = DPT("14.049", "Magnetization", _F32_MIN, _F32_MAX, "A/m")
DPT_MAGNETOMOTIVE_FORCE = DPT("14.050", "Magneto motive force", _F32_MIN, _F32_MAX, "A")
DPT_MASS = DPT("14.051", "Mass", _F32_MIN, _F32_MAX, "kg")
DPT_MASS_FLUX = DPT("14.052", "Mass flux", _F32_MIN, _F32_MAX, "kg/s")
DPT_MOMENTUM = DPT("14.053", "Momentum", _F32_MIN, _F32_MAX, "N/s")
DPT_PHASE_ANGLE_RAD = DPT("14.054", "Phase angle, radiant", _F32_MIN, _F32_MAX, "rad")
DPT_PHASE_ANGLE_DEG = DPT("14.055", "Phase angle, degree", _F32_MIN, _F32_MAX, "°")
DPT_POWER = DPT("14.056", "Power", _F32_MIN, _F32_MAX, "W")
DPT_POWER_FACTOR = DPT("14.057", "Power factor", _F32_MIN, _F32_MAX)
DPT_PRESSURE = DPT("14.058", "Pressure", _F32_MIN, _F32_MAX, "Pa")
DPT_REACTANCE = DPT("14.059", "Reactance", _F32_MIN, _F32_MAX, "Ω")
DPT_RESISTANCE = DPT("14.060", "Resistance", _F32_MIN, _F32_MAX, "Ω")
DPT_RESISTIVITY = DPT("14.061", "Resistivity", _F32_MIN, _F32_MAX, "Ωm")
DPT_SELF_INDUCTANCE = DPT("14.062", "Self inductance", _F32_MIN, _F32_MAX, "H")
DPT_SOLID_ANGLE = DPT("14.063", "Solid angle", _F32_MIN, _F32_MAX, "sr")
DPT_SOUND_INTENSITY = DPT("14.064", "Sound intensity", _F32_MIN, _F32_MAX, "W m⁻²")
DPT_SPEED = DPT("14.065", "Speed", _F32_MIN, _F32_MAX, "m/s")
DPT_STRESS = DPT("14.066", "Stress", _F32_MIN, _F32_MAX, "Pa")
DPT_SURFACE_TENSION = DPT("14.067", "Surface tension", _F32_MIN, _F32_MAX, "N/m")
DPT_COMMON_TEMPERATURE = DPT("14.068", "Temperature in Celsius Degree", _F32_MIN, _F32_MAX, "°C")
DPT_ABSOLUTE_TEMPERATURE = DPT("14.069", "Temperature, absolute", _F32_MIN, _F32_MAX, "K")
DPT_TEMPERATURE_DIFFERENCE = DPT("14.070", "Temperature difference", _F32_MIN, _F32_MAX, "K")
DPT_THERMAL_CAPACITY = DPT("14.071", "Thermal capacity", _F32_MIN, _F32_MAX, "J/K")
DPT_THERMAL_CONDUCTIVITY = DPT("14.072", "Thermal conductivity", _F32_MIN, _F32_MAX, "W/m K⁻¹")
DPT_THERMOELECTRIC_POWER = DPT("14.073", "Thermoelectric power", _F32_MIN, _F32_MAX, "V/K")
DPT_TIME = DPT("14.074", "Time", _F32_MIN, _F32_MAX, "s")
DPT_TORQUE = DPT("14.075", "Torque", _F32_MIN, _F32_MAX, "Nm")
DPT_VOLUME = DPT("14.076", "Volume", _F32_MIN, _F32_MAX, "m³")
DPT_VOLUME_FLUX = DPT("14.077", "Volume flux", _F32_MIN, _F32_MAX, "m³/s")
DPT_WEIGHT = DPT("14.078", "Weight", _F32_MIN, _F32_MAX, "N")
DPT_WORK = DPT("14.079", "Work", _F32_MIN, _F32_MAX, "J")


def format_float32(value: float) -> str:
    """Shortest text that reads back to the same single precision value.

    Magnitudes of 100000 and above use scientific notation with at most
    five fraction digits: 1234567.0 → "1.23457E6".
    """
    if value == 0 or not math.isfinite(value):
        return repr(value)
    packed = _F32.pack(value)
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if _F32.pack(float(text)) == packed:
            break
    short = float(text)
    if abs(short) < 100000:
        return repr(short)
    mantissa, _, exp = f"{short:.5E}".partition("E")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}E{int(exp)}"


class Float32Translator(Translator):
    MAIN_NUMBER = 14
    DESCRIPTION = "4-Octet Float Value"
    TYPE_SIZE = 4
    SUB_TYPES = sub_types(
        DPT_ACCELERATION,
        DPT_ACCELERATION_ANGULAR,
        DPT_ACTIVATION_ENERGY,
        DPT_ACTIVITY,
        DPT_MOL,
        DPT_AMPLITUDE,
        DPT_ANGLE_RAD,
        DPT_ANGLE_DEG,
        DPT_ANGULAR_MOMENTUM,
        DPT_ANGULAR_VELOCITY,
        DPT_AREA,
        DPT_CAPACITANCE,
        DPT_CHARGE_DENSITY_SURFACE,
        DPT_CHARGE_DENSITY_VOLUME,
        DPT_COMPRESSIBILITY,
        DPT_CONDUCTANCE,
        DPT_ELECTRICAL_CONDUCTIVITY,
        DPT_DENSITY,
        DPT_ELECTRIC_CHARGE,
        DPT_ELECTRIC_CURRENT,
        DPT_ELECTRIC_CURRENTDENSITY,
        DPT_ELECTRIC_DIPOLEMOMENT,
        DPT_ELECTRIC_DISPLACEMENT,
        DPT_ELECTRIC_FIELDSTRENGTH,
        DPT_ELECTRIC_FLUX,
        DPT_ELECTRIC_FLUX_DENSITY,
        DPT_ELECTRIC_POLARIZATION,
        DPT_ELECTRIC_POTENTIAL,
        DPT_ELECTRIC_POTENTIAL_DIFFERENCE,
        DPT_ELECTROMAGNETIC_MOMENT,
        DPT_ELECTROMOTIVE_FORCE,
        DPT_ENERGY,
        DPT_FORCE,
        DPT_FREQUENCY,
        DPT_ANGULAR_FREQUENCY,
        DPT_HEAT_CAPACITY,
        DPT_HEAT_FLOWRATE,
        DPT_HEAT_QUANTITY,
        DPT_IMPEDANCE,
        DPT_LENGTH,
        DPT_LIGHT_QUANTITY,
        DPT_LUMINANCE,
        DPT_LUMINOUS_FLUX,
        DPT_LUMINOUS_INTENSITY,
        DPT_MAGNETIC_FIELDSTRENGTH,
        DPT_MAGNETIC_FLUX,
        DPT_MAGNETIC_FLUX_DENSITY,
        DPT_MAGNETIC_MOMENT,
        DPT_MAGNETIC_POLARIZATION,
        DPT_MAGNETIZATION,
        DPT_MAGNETOMOTIVE_FORCE,
        DPT_MASS,
        DPT_MASS_FLUX,
        DPT_MOMENTUM,
        DPT_PHASE_ANGLE_RAD,
        DPT_PHASE_ANGLE_DEG,
        DPT_POWER,
        DPT_POWER_FACTOR,
        DPT_PRESSURE,
        DPT_REACTANCE,
        DPT_RESISTANCE,
        DPT_RESISTIVITY,
        DPT_SELF_INDUCTANCE,
        DPT_SOLID_ANGLE,
        DPT_SOUND_INTENSITY,
        DPT_SPEED,
        DPT_STRESS,
        DPT_SURFACE_TENSION,
        DPT_COMMON_TEMPERATURE,
        DPT_ABSOLUTE_TEMPERATURE,
        DPT_TEMPERATURE_DIFFERENCE,
        DPT_THERMAL_CAPACITY,
        DPT_THERMAL_CONDUCTIVITY,
        DPT_THERMOELECTRIC_POWER,
        DPT_TIME,
        DPT_TORQUE,
        DPT_VOLUME,
        DPT_VOLUME_FLUX,
        DPT_WEIGHT,
        DPT_WORK,
    )

    def __init__(self, dpt: Union[DPT, str]):
        super().__init__(dpt)
        self._min = float(self.dpt.lower)
        self._max = float(self.dpt.upper)

    @property
    def value_float(self) -> float:
        return _F32.unpack_from(self._data)[0]

    def numeric_value(self) -> float:
        return self.value_float

    def _to_dpt(self, value: Any, dst: bytearray, index: int) -> None:
        if isinstance(value, str):
            try:
                value = parse_decimal(self._remove_unit(value))
            except ValueError as e:
                raise self._error("wrong value format", value) from e
        elif not isinstance(value, (int, float)):
            raise DPTUsageError(f"DPT {self.dpt.id}: unsupported value type {type(value).__name__}")
        if not self._min <= value <= self._max:
            raise self._range_error(value)
        _F32.pack_into(dst, 4 * index, value)

    def _from_dpt(self, index: int) -> str:
        value = _F32.unpack_from(self._data, 4 * index)[0]
        return self._append_unit(format_float32(value))
