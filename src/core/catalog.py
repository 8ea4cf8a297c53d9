# Catalogo dei parametri degli impulsi di corrente
"""
Dati di riferimento per le classi di impulso IEC 62305-1.

Ogni classe ha una famiglia di forma (impulsiva oppure oscillatoria),
una designazione canonica (es. "10/350 µs"), le costanti di forma per
ogni funzione analitica ammessa e i valori di riferimento (corrente di
picco, carica, energia specifica).

Costanti di forma (valori SI):
    Heidler:           τ1, τ2, η, n
    Doppio esponenziale: τ1, τ2, η
    Sinusoide smorzata: τ, ω, η

Le tabelle sono immutabili; la ricerca per classe è totale.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

from .units import Q_
from .errors import ConfigurationError


class ImpulseClass(Enum):
    """Classi di impulso di corrente."""

    PEB = "PEB"  # Primo colpo positivo, 10/350 µs
    NEB = "NEB"  # Primo colpo negativo, 1/200 µs
    NFB = "NFB"  # Colpo negativo successivo, 0.25/100 µs
    SEB = "SEB"  # Corrente di sovratensione, 8/20 µs


class ShapeFamily(Enum):
    """Famiglia della forma d'onda."""

    IMPULSIVA = "impulsiva"        # Unipolare (Heidler / doppio esponenziale)
    OSCILLATORIA = "oscillatoria"  # Bipolare (sinusoide smorzata)


class FunctionType(Enum):
    """Funzioni analitiche selezionabili."""

    HEIDLER = "heidler"
    DOUBLE_EXP = "double_exp"
    BOTH = "both"  # Confronto Heidler + doppio esponenziale
    DAMPED_SINE = "damped_sine"


# "SC" è il nome storico della corrente di sovratensione
ALIAS_CLASSI = MappingProxyType({"SC": ImpulseClass.SEB})


@dataclass(frozen=True)
class HeidlerParameters:
    tau1: float
    tau2: float
    eta: float
    n: int = 10


@dataclass(frozen=True)
class DoubleExpParameters:
    tau1: float
    tau2: float
    eta: float


@dataclass(frozen=True)
class DampedSineParameters:
    tau: float
    omega: float
    eta: float


@dataclass(frozen=True)
class ReferenceValues:
    """
    Valori di riferimento IEC per una classe di impulso.

    Attributi:
        corrente_picco: Corrente di picco (A)
        carica: Carica (C)
        energia_specifica: Energia specifica W/R (J/Ω)
    """

    corrente_picco: float
    carica: float
    energia_specifica: float

    @property
    def grandezze(self) -> dict:
        """Valori di riferimento come grandezze Pint."""
        return {
            "corrente_picco": Q_(self.corrente_picco, "A"),
            "carica": Q_(self.carica, "C"),
            "energia_specifica": Q_(self.energia_specifica, "J/ohm"),
        }


@dataclass(frozen=True)
class ImpulseInfo:
    """
    Metadati e costanti di forma di una classe di impulso.

    Attributi:
        nome: Nome esteso (es. "Positive First Stroke (PEB)")
        designazione: Designazione T1/T2 (es. "10/350 µs")
        descrizione: Descrizione breve
        famiglia: Famiglia della forma d'onda
        heidler: Costanti Heidler (solo classi impulsive)
        double_exp: Costanti doppio esponenziale (solo classi impulsive)
        damped_sine: Costanti sinusoide smorzata (solo classi oscillatorie)
    """

    nome: str
    designazione: str
    descrizione: str
    famiglia: ShapeFamily
    heidler: Optional[HeidlerParameters] = None
    double_exp: Optional[DoubleExpParameters] = None
    damped_sine: Optional[DampedSineParameters] = None

    @property
    def funzioni_ammesse(self) -> Tuple[FunctionType, ...]:
        if self.famiglia is ShapeFamily.OSCILLATORIA:
            return (FunctionType.DAMPED_SINE,)
        return (FunctionType.HEIDLER, FunctionType.DOUBLE_EXP, FunctionType.BOTH)

    @property
    def funzione_default(self) -> FunctionType:
        return self.funzioni_ammesse[0]

    @property
    def costante_coda(self) -> Optional[float]:
        """τ2 di Heidler per le classi impulsive, τ per quelle oscillatorie."""
        if self.famiglia is ShapeFamily.OSCILLATORIA:
            return self.damped_sine.tau if self.damped_sine else None
        return self.heidler.tau2 if self.heidler else None

    def to_dict(self) -> dict:
        return {
            "nome": self.nome,
            "designazione": self.designazione,
            "descrizione": self.descrizione,
            "famiglia": self.famiglia.value,
        }


# Parametri da dissertazione (Tabelle D.1 e D.2)
IMPULSE_PARAMS = MappingProxyType({
    ImpulseClass.PEB: ImpulseInfo(
        nome="Positive First Stroke (PEB)",
        designazione="10/350 µs",
        descrizione="Lightning current, Type 1",
        famiglia=ShapeFamily.IMPULSIVA,
        heidler=HeidlerParameters(tau1=18.8e-6, tau2=485e-6, eta=0.93, n=10),
        double_exp=DoubleExpParameters(tau1=4.064e-6, tau2=470.107e-6, eta=0.951),
    ),
    ImpulseClass.NEB: ImpulseInfo(
        nome="Negative First Stroke (NEB)",
        designazione="1/200 µs",
        descrizione="Negative first stroke",
        famiglia=ShapeFamily.IMPULSIVA,
        heidler=HeidlerParameters(tau1=1.826e-6, tau2=285e-6, eta=0.988, n=10),
        double_exp=DoubleExpParameters(tau1=0.374e-6, tau2=284.328e-6, eta=0.99),
    ),
    ImpulseClass.NFB: ImpulseInfo(
        nome="Negative Subsequent Stroke (NFB)",
        designazione="0.25/100 µs",
        descrizione="Negative subsequent stroke",
        famiglia=ShapeFamily.IMPULSIVA,
        heidler=HeidlerParameters(tau1=0.454e-6, tau2=143.4e-6, eta=0.993, n=10),
        double_exp=DoubleExpParameters(tau1=0.092e-6, tau2=143.134e-6, eta=0.995),
    ),
    ImpulseClass.SEB: ImpulseInfo(
        nome="Surge Current (SC)",
        designazione="8/20 µs",
        descrizione="Surge current, Type 2",
        famiglia=ShapeFamily.OSCILLATORIA,
        damped_sine=DampedSineParameters(tau=24e-6, omega=120023.0, eta=0.615),
    ),
})

REFERENCE_VALUES = MappingProxyType({
    ImpulseClass.PEB: ReferenceValues(corrente_picco=200e3, carica=100.0, energia_specifica=10e6),
    ImpulseClass.NEB: ReferenceValues(corrente_picco=100e3, carica=28.7, energia_specifica=1.44e6),
    ImpulseClass.NFB: ReferenceValues(corrente_picco=50e3, carica=7.2, energia_specifica=0.18e6),
    ImpulseClass.SEB: ReferenceValues(corrente_picco=10e3, carica=5.0, energia_specifica=0.05e6),
})


def risolvi_classe(token) -> ImpulseClass:
    """
    Interpreta un token di classe, risolvendo gli alias.

    Parametri:
        token: ImpulseClass oppure stringa ("PEB", "NEB", "NFB", "SEB", "SC")

    Ritorna:
        ImpulseClass corrispondente

    Solleva:
        ConfigurationError se il token non è riconosciuto
    """
    if isinstance(token, ImpulseClass):
        return token
    chiave = str(token).strip().upper()
    if chiave in ALIAS_CLASSI:
        return ALIAS_CLASSI[chiave]
    try:
        return ImpulseClass(chiave)
    except ValueError:
        disponibili = [c.value for c in ImpulseClass] + list(ALIAS_CLASSI)
        raise ConfigurationError(
            f"Classe di impulso '{token}' non riconosciuta. Disponibili: {disponibili}"
        ) from None


def risolvi_funzione(token) -> FunctionType:
    """Interpreta un token di funzione ("heidler", "double_exp", "both", "damped_sine")."""
    if isinstance(token, FunctionType):
        return token
    try:
        return FunctionType(str(token).strip().lower())
    except ValueError:
        disponibili = [f.value for f in FunctionType]
        raise ConfigurationError(
            f"Funzione '{token}' non riconosciuta. Disponibili: {disponibili}"
        ) from None


def get_impulse_info(classe) -> ImpulseInfo:
    """Ritorna metadati e costanti di forma della classe."""
    return IMPULSE_PARAMS[risolvi_classe(classe)]


def get_reference_values(classe) -> ReferenceValues:
    """Ritorna i valori di riferimento della classe."""
    return REFERENCE_VALUES[risolvi_classe(classe)]
