# Estrazione dei parametri IEC da una forma d'onda
"""
Calcolo dei parametri caratteristici di un impulso di corrente.

Parametri (IEC 62305-1):
    - Corrente di picco:   I = max |i(t)|
    - Energia specifica:   W/R = ∫ i² dt
    - Carica:              Q = ∫ i dt       (impulsi unipolari)
                           Q = ∫ |i| dt     (impulsi bipolari/oscillatori)
    - Ripidità massima:    max |di/dt|
    - Tempo di fronte:     T1 = 1.25 · (t90 - t10)
    - Tempo all'emivalore: T2 = t50 - O1,  con O1 = t10 - 0.1 · T1

Per una forma d'onda bipolare l'integrale con segno si cancellerebbe in parte
e sottostimerebbe la carica trasferita: per le classi oscillatorie si integra
il modulo.

Tutti i valori sono in unità SI (A, s, J/Ω, C, A/s); le conversioni in
kA, MJ/Ω e kA/µs sono disponibili con to_dict().
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from ...core.catalog import IMPULSE_PARAMS, ImpulseClass, ShapeFamily
from ...core.errors import ComputationError
from ...core.units import (
    Q_,
    UNITA_CARICA,
    UNITA_CORRENTE,
    UNITA_ENERGIA_SPECIFICA,
    UNITA_PENDENZA,
    UNITA_TEMPO,
)
from .numerics import gradiente, integra_trapezi, massimo_assoluto


@dataclass(frozen=True)
class ParameterSummary:
    """
    Parametri caratteristici di una forma d'onda.

    Attributi:
        corrente_picco: Corrente di picco (A)
        tempo_picco: Istante del picco, prima occorrenza (s)
        energia_specifica: Energia specifica W/R (J/Ω)
        carica: Carica (C)
        di_dt_max: Massima ripidità |di/dt| (A/s)
        tempo_fronte: Tempo di fronte T1 (s), NaN se non misurabile
        tempo_emivalore: Tempo all'emivalore T2 (s), NaN se fuori finestra
    """

    corrente_picco: float
    tempo_picco: float
    energia_specifica: float
    carica: float
    di_dt_max: float
    tempo_fronte: float = float("nan")
    tempo_emivalore: float = float("nan")

    @property
    def grandezze(self) -> dict:
        """Parametri come grandezze Pint nelle unità di visualizzazione."""
        return {
            "corrente_picco": Q_(self.corrente_picco, "A").to(UNITA_CORRENTE),
            "tempo_picco": Q_(self.tempo_picco, "s").to(UNITA_TEMPO),
            "energia_specifica": Q_(self.energia_specifica, "J/ohm").to(UNITA_ENERGIA_SPECIFICA),
            "carica": Q_(self.carica, "C").to(UNITA_CARICA),
            "di_dt_max": Q_(self.di_dt_max, "A/s").to(UNITA_PENDENZA),
            "tempo_fronte": Q_(self.tempo_fronte, "s").to(UNITA_TEMPO),
            "tempo_emivalore": Q_(self.tempo_emivalore, "s").to(UNITA_TEMPO),
        }

    def to_dict(self) -> dict:
        """Serializza i parametri (SI + unità di visualizzazione)."""
        g = self.grandezze
        return {
            "I_peak": self.corrente_picco,
            "I_peak_kA": g["corrente_picco"].magnitude,
            "t_peak": self.tempo_picco,
            "W_R": self.energia_specifica,
            "W_R_MJ": g["energia_specifica"].magnitude,
            "Q": self.carica,
            "di_dt_max": self.di_dt_max,
            "di_dt_max_kA_us": g["di_dt_max"].magnitude,
            "T1_us": g["tempo_fronte"].magnitude,
            "T2_us": g["tempo_emivalore"].magnitude,
        }


def _interpola(t0: float, t1: float, y0: float, y1: float, livello: float) -> float:
    if y1 == y0:
        return t1
    return t0 + (livello - y0) * (t1 - t0) / (y1 - y0)


def _attraversamento_salita(tempo, modulo, idx_picco, livello) -> float:
    """Primo istante in cui |i| raggiunge il livello sul fronte di salita."""
    k = int(np.argmax(modulo[: idx_picco + 1] >= livello))
    if k == 0:
        return float(tempo[0])
    return _interpola(tempo[k - 1], tempo[k], modulo[k - 1], modulo[k], livello)


def calcola_tempi_caratteristici(tempo: np.ndarray, corrente: np.ndarray) -> Tuple[float, float]:
    """
    Calcola tempo di fronte T1 e tempo all'emivalore T2.

    Parametri:
        tempo: Istanti di campionamento (s)
        corrente: Corrente (A)

    Ritorna:
        Tuple (T1, T2) in secondi; T2 è NaN se la corrente non scende
        sotto il 50% del picco entro la finestra
    """
    tempo = np.asarray(tempo, dtype=float)
    modulo = np.abs(np.asarray(corrente, dtype=float))
    picco, idx = massimo_assoluto(modulo)
    if picco == 0.0 or idx == 0:
        return float("nan"), float("nan")

    t10 = _attraversamento_salita(tempo, modulo, idx, 0.1 * picco)
    t90 = _attraversamento_salita(tempo, modulo, idx, 0.9 * picco)
    t1 = 1.25 * (t90 - t10)
    origine = t10 - 0.1 * t1

    coda = modulo[idx + 1:] <= 0.5 * picco
    if not np.any(coda):
        return t1, float("nan")
    k = idx + 1 + int(np.argmax(coda))
    t50 = _interpola(tempo[k - 1], tempo[k], modulo[k - 1], modulo[k], 0.5 * picco)
    return t1, t50 - origine


def calcola_parametri(
    tempo: np.ndarray,
    corrente: np.ndarray,
    classe: ImpulseClass,
    derivata: Optional[np.ndarray] = None,
) -> ParameterSummary:
    """
    Calcola i parametri IEC di una forma d'onda a passo uniforme.

    Parametri:
        tempo: Istanti di campionamento (s), almeno 2
        corrente: Corrente (A), stessa lunghezza di tempo
        classe: Classe di impulso (seleziona la carica unipolare o bipolare)
        derivata: di/dt già calcolata (opzionale, evita un secondo gradiente)

    Ritorna:
        ParameterSummary
    """
    tempo = np.asarray(tempo, dtype=float)
    corrente = np.asarray(corrente, dtype=float)
    if tempo.size < 2 or tempo.size != corrente.size:
        raise ComputationError(
            f"Servono almeno 2 campioni di pari lunghezza (tempo: {tempo.size}, corrente: {corrente.size})"
        )
    dt = float(tempo[1] - tempo[0])
    bipolare = IMPULSE_PARAMS[classe].famiglia is ShapeFamily.OSCILLATORIA

    # Picco (prima occorrenza)
    corrente_picco, idx_picco = massimo_assoluto(corrente)
    tempo_picco = float(tempo[idx_picco])

    # Energia specifica W/R
    energia_specifica = integra_trapezi(corrente**2, dt)

    # Carica
    carica = integra_trapezi(np.abs(corrente) if bipolare else corrente, dt)

    # Ripidità massima
    if derivata is None:
        derivata = gradiente(corrente, dt)
    di_dt_max, _ = massimo_assoluto(derivata)

    t1, t2 = calcola_tempi_caratteristici(tempo, corrente)

    return ParameterSummary(
        corrente_picco=corrente_picco,
        tempo_picco=tempo_picco,
        energia_specifica=energia_specifica,
        carica=carica,
        di_dt_max=di_dt_max,
        tempo_fronte=t1,
        tempo_emivalore=t2,
    )
