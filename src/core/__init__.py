# Modulo core - Unità di misura, catalogo impulsi, costanti, errori
"""
Modulo core del calcolatore di impulsi.

Contiene:
    - units: Sistema di unità di misura basato su Pint
    - catalog: Classi di impulso, costanti di forma, valori di riferimento
    - constants: Costanti del pianificatore di campionamento
    - errors: Errori tipizzati e avvisi non bloccanti
"""

from .units import ureg, Q_
from .catalog import (
    ImpulseClass,
    ShapeFamily,
    FunctionType,
    ImpulseInfo,
    ReferenceValues,
    HeidlerParameters,
    DoubleExpParameters,
    DampedSineParameters,
    IMPULSE_PARAMS,
    REFERENCE_VALUES,
    risolvi_classe,
    risolvi_funzione,
    get_impulse_info,
    get_reference_values,
)
from .constants import SamplingParameters
from .errors import (
    ImpulseError,
    ConfigurationError,
    InputValidationError,
    ComputationError,
    Issue,
    Level,
)

__all__ = [
    "ureg",
    "Q_",
    "ImpulseClass",
    "ShapeFamily",
    "FunctionType",
    "ImpulseInfo",
    "ReferenceValues",
    "HeidlerParameters",
    "DoubleExpParameters",
    "DampedSineParameters",
    "IMPULSE_PARAMS",
    "REFERENCE_VALUES",
    "risolvi_classe",
    "risolvi_funzione",
    "get_impulse_info",
    "get_reference_values",
    "SamplingParameters",
    "ImpulseError",
    "ConfigurationError",
    "InputValidationError",
    "ComputationError",
    "Issue",
    "Level",
]
