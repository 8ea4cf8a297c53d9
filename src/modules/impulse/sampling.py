# Pianificatore del campionamento temporale
"""
Risoluzione di durata e passo temporale ("auto" oppure espliciti) e
costruzione della griglia dei tempi.

Regole:
    - Durata "auto" (storicamente "infinity"): moltiplicatore · τ
        7 · τ2 per le classi impulsive, 5 · τ per quelle oscillatorie,
        1 ms se la classe non ha costante di coda.
    - Passo "auto": costante per classe (vedi SamplingParameters.PASSO_AUTO).
    - Limite di punti: se floor(durata/passo) supera MAX_PUNTI il passo viene
      allargato a durata/MAX_PUNTI. La durata resta invariata, la risoluzione
      peggiora e il chiamante riceve un avviso non bloccante.
"""

from dataclasses import dataclass
import logging
import math
from typing import Tuple, Union

import numpy as np
import pint

from ...core.catalog import IMPULSE_PARAMS, ImpulseClass
from ...core.constants import SamplingParameters
from ...core.errors import InputValidationError, Issue, Level
from ...core.units import in_si

logger = logging.getLogger(__name__)

# Token testuali accettati per "auto"
TOKEN_AUTO = ("auto", "infinity")


@dataclass(frozen=True)
class Auto:
    """Valore da calcolare automaticamente."""

    def __str__(self) -> str:
        return "auto"


@dataclass(frozen=True)
class Explicit:
    """Valore esplicito in unità SI."""

    valore: float

    def __str__(self) -> str:
        return f"{self.valore:g}"


Impostazione = Union[Auto, Explicit]


def interpreta_impostazione(valore, campo: str = "valore", unita: str = "s") -> Impostazione:
    """
    Converte un ingresso del chiamante nell'unione Auto / Explicit.

    Accetta None, "auto", "infinity", numeri, stringhe numeriche e grandezze
    Pint. I valori espliciti devono essere finiti e positivi.

    Parametri:
        valore: Ingresso da interpretare
        campo: Nome del campo (per i messaggi di errore)
        unita: Unità SI del campo

    Solleva:
        InputValidationError se il valore non è interpretabile o non positivo
    """
    if isinstance(valore, Auto):
        return valore
    if isinstance(valore, Explicit):
        valore = valore.valore
    if valore is None:
        return Auto()
    if isinstance(valore, str):
        testo = valore.strip().lower()
        if testo in TOKEN_AUTO:
            return Auto()
        try:
            valore = float(testo)
        except ValueError:
            raise InputValidationError(
                f"{campo}: '{valore}' non è un numero né 'auto'"
            ) from None
    if isinstance(valore, bool):
        raise InputValidationError(f"{campo}: valore booleano non ammesso")
    try:
        numero = in_si(valore, unita)
    except pint.DimensionalityError as exc:
        raise InputValidationError(f"{campo}: unità non compatibile con '{unita}' ({exc})") from None
    except (TypeError, ValueError):
        raise InputValidationError(f"{campo}: valore '{valore}' non numerico") from None
    if not math.isfinite(numero) or numero <= 0:
        raise InputValidationError(f"{campo} deve essere finito e positivo (ricevuto {numero})")
    return Explicit(numero)


@dataclass(frozen=True, eq=False)
class SamplingPlan:
    """
    Piano di campionamento risolto.

    Attributi:
        passo: Passo temporale effettivo (s)
        passo_richiesto: Passo prima dell'eventuale allargamento (s)
        durata: Durata effettiva (s)
        durata_infinito: Durata "auto" della classe (s)
        n_punti: Numero di campioni
        tempo: Istanti k·passo, k = 0..n_punti-1 (sola lettura)
        avvisi: Avvisi non bloccanti
    """

    passo: float
    passo_richiesto: float
    durata: float
    durata_infinito: float
    n_punti: int
    tempo: np.ndarray
    avvisi: Tuple[Issue, ...] = ()

    @property
    def passo_allargato(self) -> bool:
        return self.passo > self.passo_richiesto


def calcola_durata_infinito(classe: ImpulseClass) -> float:
    """Durata "auto": moltiplicatore della famiglia per la costante di coda."""
    info = IMPULSE_PARAMS[classe]
    tau = info.costante_coda
    if tau is None:
        return SamplingParameters.DURATA_DEFAULT
    return SamplingParameters.MOLTIPLICATORE_DURATA[info.famiglia] * tau


def risolvi_durata(classe: ImpulseClass, durata: Impostazione) -> float:
    if isinstance(durata, Explicit):
        return durata.valore
    return calcola_durata_infinito(classe)


def risolvi_passo(classe: ImpulseClass, passo: Impostazione) -> float:
    if isinstance(passo, Explicit):
        return passo.valore
    return SamplingParameters.PASSO_AUTO.get(classe, SamplingParameters.PASSO_DEFAULT)


def pianifica_campionamento(
    classe: ImpulseClass,
    durata: Impostazione = Auto(),
    passo: Impostazione = Auto(),
    max_punti: int = SamplingParameters.MAX_PUNTI,
) -> SamplingPlan:
    """
    Risolve durata e passo e costruisce la griglia dei tempi.

    Parametri:
        classe: Classe di impulso (già risolta dagli alias)
        durata: Auto oppure Explicit(durata in s)
        passo: Auto oppure Explicit(passo in s)
        max_punti: Limite di campioni

    Ritorna:
        SamplingPlan con n_punti ≤ max_punti
    """
    durata_infinito = calcola_durata_infinito(classe)
    durata_effettiva = risolvi_durata(classe, durata)
    passo_richiesto = risolvi_passo(classe, passo)
    passo_effettivo = passo_richiesto

    n_punti = int(math.floor(durata_effettiva / passo_effettivo))
    avvisi = []

    logger.debug(
        "Durata utente: %s, durata infinito: %.6g s, durata usata: %.6g s, passo: %.3g s, punti stimati: %d",
        durata, durata_infinito, durata_effettiva, passo_effettivo, n_punti,
    )

    if n_punti > max_punti:
        passo_effettivo = max(passo_effettivo, durata_effettiva / max_punti)
        n_punti = min(int(math.floor(durata_effettiva / passo_effettivo)), max_punti)
        messaggio = (
            f"Passo temporale allargato da {passo_richiesto:.2e} s a {passo_effettivo:.2e} s "
            f"per restare sotto {max_punti:,} punti (stimati: {n_punti:,})"
        )
        logger.warning(messaggio)
        avvisi.append(Issue(Level.WARNING, "passo_allargato", messaggio, field="passo"))

    tempo = np.arange(n_punti, dtype=float) * passo_effettivo
    tempo.flags.writeable = False

    return SamplingPlan(
        passo=passo_effettivo,
        passo_richiesto=passo_richiesto,
        durata=durata_effettiva,
        durata_infinito=durata_infinito,
        n_punti=n_punti,
        tempo=tempo,
        avvisi=tuple(avvisi),
    )
