# Modulo Impulse
"""
Motore di calcolo degli impulsi di corrente di fulmine e di sovratensione.

Questo modulo implementa:
    - Generatori analitici (Heidler, doppio esponenziale, sinusoide smorzata)
    - Nucleo numerico (regola dei trapezi, derivata a differenze finite)
    - Pianificazione del campionamento con limite di punti
    - Estrazione dei parametri IEC (picco, W/R, Q, di/dt, T1/T2)
    - Orchestratore del calcolo

Equazioni principali (IEC 62305-1, Annex B):
    - i(t) = (I/η) · (t/τ1)^n / (1 + (t/τ1)^n) · exp(-t/τ2)   # Heidler
    - W/R = ∫ i² dt                                           # Energia specifica

Moduli:
    - waveforms: Funzioni analitiche e normalizzazione al picco
    - numerics: Integrazione e derivata
    - sampling: Durata, passo e griglia dei tempi
    - parameters: Parametri IEC
    - calculator: Orchestratore e riga di comando
"""

from .numerics import integra_trapezi, gradiente, massimo_assoluto
from .waveforms import (
    funzione_heidler,
    funzione_doppio_esponenziale,
    funzione_sinusoide_smorzata,
    normalizza_picco,
    genera_corrente,
    calcola_eta,
)
from .sampling import (
    Auto,
    Explicit,
    SamplingPlan,
    interpreta_impostazione,
    calcola_durata_infinito,
    pianifica_campionamento,
)
from .parameters import ParameterSummary, calcola_parametri, calcola_tempi_caratteristici
from .calculator import (
    CalculationRequest,
    ResolvedRequest,
    Waveform,
    FunctionResult,
    ImpulseResults,
    normalizza_richiesta,
    calcola_impulso,
)

__all__ = [
    # Numerics
    "integra_trapezi",
    "gradiente",
    "massimo_assoluto",
    # Waveforms
    "funzione_heidler",
    "funzione_doppio_esponenziale",
    "funzione_sinusoide_smorzata",
    "normalizza_picco",
    "genera_corrente",
    "calcola_eta",
    # Sampling
    "Auto",
    "Explicit",
    "SamplingPlan",
    "interpreta_impostazione",
    "calcola_durata_infinito",
    "pianifica_campionamento",
    # Parameters
    "ParameterSummary",
    "calcola_parametri",
    "calcola_tempi_caratteristici",
    # Calculator
    "CalculationRequest",
    "ResolvedRequest",
    "Waveform",
    "FunctionResult",
    "ImpulseResults",
    "normalizza_richiesta",
    "calcola_impulso",
]
