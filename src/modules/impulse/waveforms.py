# Generatori di forme d'onda di corrente impulsiva
"""
Modelli analitici della corrente di fulmine e di sovratensione.

Funzioni implementate (IEC 62305-1, Annex B):
    - Heidler:            i(t) = (I/η) · (t/τ1)^n / (1 + (t/τ1)^n) · exp(-t/τ2)
    - Doppio esponenziale: i(t) = (I/η) · (exp(-t/τ2) - exp(-t/τ1))
    - Sinusoide smorzata:  i(t) = (I/η) · exp(-t/τ) · sin(ω·t)

Il fattore η del catalogo è un'approssimazione empirica: dopo la valutazione
della formula ogni generatore riscala i campioni in modo che il massimo di
|i| coincida esattamente con la corrente di picco richiesta.
"""

from typing import Union
import numpy as np
from scipy.optimize import minimize_scalar

from ...core.catalog import (
    DampedSineParameters,
    DoubleExpParameters,
    FunctionType,
    HeidlerParameters,
    ImpulseInfo,
)
from ...core.errors import ComputationError, ConfigurationError
from .numerics import massimo_assoluto


def _heidler_grezza(t: np.ndarray, tau1: float, tau2: float, n: int) -> np.ndarray:
    """Heidler con I/η = 1."""
    x = np.asarray(t, dtype=float) / tau1
    with np.errstate(over="ignore", invalid="ignore"):
        xn = x**n
        # Per t >> τ1 il rapporto tende a 1 anche quando x^n va in overflow
        rapporto = np.where(np.isinf(xn), 1.0, xn / (1.0 + xn))
    return rapporto * np.exp(-np.asarray(t, dtype=float) / tau2)


def _double_exp_grezza(t: np.ndarray, tau1: float, tau2: float) -> np.ndarray:
    t = np.asarray(t, dtype=float)
    return np.exp(-t / tau2) - np.exp(-t / tau1)


def _damped_sine_grezza(t: np.ndarray, tau: float, omega: float) -> np.ndarray:
    t = np.asarray(t, dtype=float)
    return np.exp(-t / tau) * np.sin(omega * t)


def normalizza_picco(corrente: np.ndarray, corrente_picco: float) -> np.ndarray:
    """
    Riscala la corrente perché max|i| sia esattamente corrente_picco.

    Solleva:
        ComputationError se il massimo raggiunto è nullo o non finito
    """
    massimo, _ = massimo_assoluto(corrente)
    if not np.isfinite(massimo) or massimo == 0.0:
        raise ComputationError(
            f"Forma d'onda degenere: massimo raggiunto {massimo} su {np.size(corrente)} campioni"
        )
    return corrente * (corrente_picco / massimo)


def funzione_heidler(
    tempo: np.ndarray,
    corrente_picco: float,
    tau1: float,
    tau2: float,
    eta: float,
    n: int = 10,
) -> np.ndarray:
    """
    Funzione di Heidler normalizzata al picco.

    Parametri:
        tempo: Istanti di campionamento (s), da 0 crescenti
        corrente_picco: Corrente di picco richiesta (A)
        tau1: Costante di tempo del fronte (s)
        tau2: Costante di tempo della coda (s)
        eta: Fattore di correzione del picco
        n: Esponente di ripidità

    Ritorna:
        Corrente (A), stessa lunghezza di tempo
    """
    corrente = (corrente_picco / eta) * _heidler_grezza(tempo, tau1, tau2, n)
    return normalizza_picco(corrente, corrente_picco)


def funzione_doppio_esponenziale(
    tempo: np.ndarray,
    corrente_picco: float,
    tau1: float,
    tau2: float,
    eta: float,
) -> np.ndarray:
    """Doppio esponenziale normalizzato al picco."""
    corrente = (corrente_picco / eta) * _double_exp_grezza(tempo, tau1, tau2)
    return normalizza_picco(corrente, corrente_picco)


def funzione_sinusoide_smorzata(
    tempo: np.ndarray,
    corrente_picco: float,
    tau: float,
    omega: float,
    eta: float,
) -> np.ndarray:
    """
    Sinusoide smorzata (8/20 µs) normalizzata al picco.

    La forma d'onda è bipolare: la normalizzazione usa il massimo di |i|.
    """
    corrente = (corrente_picco / eta) * _damped_sine_grezza(tempo, tau, omega)
    return normalizza_picco(corrente, corrente_picco)


def genera_corrente(
    funzione: FunctionType,
    tempo: np.ndarray,
    corrente_picco: float,
    info: ImpulseInfo,
) -> np.ndarray:
    """
    Genera la corrente con la funzione richiesta e le costanti della classe.

    Solleva:
        ConfigurationError se la classe non ha costanti per la funzione
    """
    if funzione is FunctionType.HEIDLER and info.heidler:
        p = info.heidler
        return funzione_heidler(tempo, corrente_picco, p.tau1, p.tau2, p.eta, p.n)
    if funzione is FunctionType.DOUBLE_EXP and info.double_exp:
        p = info.double_exp
        return funzione_doppio_esponenziale(tempo, corrente_picco, p.tau1, p.tau2, p.eta)
    if funzione is FunctionType.DAMPED_SINE and info.damped_sine:
        p = info.damped_sine
        return funzione_sinusoide_smorzata(tempo, corrente_picco, p.tau, p.omega, p.eta)
    raise ConfigurationError(
        f"Funzione '{funzione.value}' non disponibile per {info.nome} ({info.designazione})"
    )


def calcola_eta(
    parametri: Union[HeidlerParameters, DoubleExpParameters, DampedSineParameters],
) -> float:
    """
    Calcola il fattore di correzione η esatto di un modello analitico.

    η è il massimo della funzione con I/η = 1, cercato sul primo lobo
    con minimizzazione scalare limitata.

    Parametri:
        parametri: Costanti di forma del modello

    Ritorna:
        η esatto (da confrontare con il valore empirico del catalogo)
    """
    if isinstance(parametri, HeidlerParameters):
        def f(t):
            return _heidler_grezza(t, parametri.tau1, parametri.tau2, parametri.n)
        limite = parametri.tau2
    elif isinstance(parametri, DoubleExpParameters):
        def f(t):
            return _double_exp_grezza(t, parametri.tau1, parametri.tau2)
        limite = parametri.tau2
    elif isinstance(parametri, DampedSineParameters):
        def f(t):
            return _damped_sine_grezza(t, parametri.tau, parametri.omega)
        limite = np.pi / parametri.omega
    else:
        raise ConfigurationError(f"Parametri di forma non supportati: {type(parametri).__name__}")

    risultato = minimize_scalar(
        lambda t: -abs(float(f(t))),
        bounds=(0.0, limite),
        method="bounded",
        options={"xatol": limite * 1e-10},
    )
    return float(-risultato.fun)
