# Orchestratore del calcolo degli impulsi di corrente
"""
Punto d'ingresso del motore di calcolo.

Flusso:
    1. Normalizzazione della richiesta (alias di classe, funzione di default,
       corrente di picco di riferimento, "auto" → Auto/Explicit) e validazione
    2. Pianificazione del campionamento (passo, durata, griglia dei tempi)
    3. Generazione della corrente con una o due funzioni analitiche
       (due solo in modalità confronto "both")
    4. Derivata opzionale e parametri IEC sull'intera finestra
    5. Impacchettamento in ImpulseResults

Il calcolo è sincrono e senza stato condiviso: richieste identiche danno
risultati identici.

Esempio:
    >>> risultati = calcola_impulso(CalculationRequest("PEB", "heidler", 200e3))
    >>> risultati.risultati["heidler"].parametri.corrente_picco
    200000.0
"""

from dataclasses import dataclass, field
import logging
import math
import time
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
import pint

from ...core.catalog import (
    IMPULSE_PARAMS,
    REFERENCE_VALUES,
    FunctionType,
    ImpulseClass,
    ImpulseInfo,
    risolvi_classe,
    risolvi_funzione,
)
from ...core.errors import ConfigurationError, ImpulseError, InputValidationError, Issue
from ...core.units import Q_, UNITA_TEMPO, formatta_grandezza, in_si
from .numerics import gradiente
from .parameters import ParameterSummary, calcola_parametri
from .sampling import Auto, Impostazione, interpreta_impostazione, pianifica_campionamento
from .waveforms import genera_corrente

logger = logging.getLogger(__name__)

ETICHETTE_FUNZIONI = MappingProxyType({
    FunctionType.HEIDLER: "Heidler",
    FunctionType.DOUBLE_EXP: "Double-Exponential",
    FunctionType.DAMPED_SINE: "Damped Sine",
})


@dataclass(frozen=True)
class CalculationRequest:
    """
    Richiesta di calcolo fornita dal chiamante.

    Attributi:
        tipo_impulso: Classe ("PEB", "NEB", "NFB", "SEB", "SC") o ImpulseClass
        funzione: "heidler", "double_exp", "both", "damped_sine" (default per classe)
        corrente_picco: Corrente di picco in A o grandezza Pint (default: riferimento)
        durata: Durata in s, grandezza Pint, "auto"/"infinity" o None
        passo: Passo temporale in s, grandezza Pint, "auto" o None
        calcola_derivata: Se True restituisce anche di/dt
    """

    tipo_impulso: object = ImpulseClass.PEB
    funzione: object = None
    corrente_picco: object = None
    durata: object = None
    passo: object = None
    calcola_derivata: bool = False


@dataclass(frozen=True)
class ResolvedRequest:
    """Richiesta normalizzata e validata."""

    classe: ImpulseClass
    funzione: FunctionType
    funzioni: Tuple[FunctionType, ...]
    corrente_picco: float
    durata: Impostazione
    passo: Impostazione
    calcola_derivata: bool


@dataclass(frozen=True, eq=False)
class Waveform:
    """
    Forma d'onda campionata a passo uniforme (array in sola lettura).

    Attributi:
        tempo: Istanti (s), da 0
        corrente: Corrente (A)
        derivata: di/dt (A/s), solo se richiesta
    """

    tempo: np.ndarray
    corrente: np.ndarray
    derivata: Optional[np.ndarray] = None

    def to_dict(self) -> dict:
        dati = {"time": self.tempo.tolist(), "current": self.corrente.tolist()}
        if self.derivata is not None:
            dati["derivative"] = self.derivata.tolist()
        return dati


@dataclass(frozen=True, eq=False)
class FunctionResult:
    funzione: FunctionType
    etichetta: str
    forma_onda: Waveform
    parametri: ParameterSummary


@dataclass(frozen=True, eq=False)
class ImpulseResults:
    """
    Risultato completo di un calcolo.

    Attributi:
        classe: Classe di impulso risolta
        info: Metadati della classe dal catalogo
        risultati: Mappa etichetta funzione → FunctionResult
        durata_utente: Scelta di durata del chiamante (Auto o Explicit)
        durata_infinito: Durata "auto" della classe (s)
        durata_effettiva: Durata usata (s)
        passo: Passo temporale usato (s)
        n_punti: Numero di campioni
        avvisi: Avvisi non bloccanti
    """

    classe: ImpulseClass
    info: ImpulseInfo
    risultati: Mapping[str, FunctionResult]
    durata_utente: Impostazione
    durata_infinito: float
    durata_effettiva: float
    passo: float
    n_punti: int
    avvisi: Tuple[Issue, ...] = field(default_factory=tuple)

    def to_dict(self, includi_forme_onda: bool = True) -> dict:
        """Serializza il risultato in strutture JSON-compatibili."""
        risultati = {}
        for chiave, r in self.risultati.items():
            voce = {"functionType": r.etichetta, "parameters": r.parametri.to_dict()}
            if includi_forme_onda:
                voce["waveform"] = r.forma_onda.to_dict()
            risultati[chiave] = voce
        return {
            "results": risultati,
            "impulseInfo": self.info.to_dict(),
            "impulseType": self.classe.value,
            "userDuration": "infinity" if isinstance(self.durata_utente, Auto) else self.durata_utente.valore,
            "infinityDuration": self.durata_infinito,
            "actualDuration": self.durata_effettiva,
            "dt": self.passo,
            "points": self.n_punti,
            "notices": [{"level": a.level.value, "code": a.code, "message": a.message} for a in self.avvisi],
        }


def _valida_corrente_picco(valore) -> float:
    if isinstance(valore, bool):
        raise InputValidationError("corrente_picco: valore booleano non ammesso")
    try:
        picco = in_si(valore, "A")
    except pint.DimensionalityError as exc:
        raise InputValidationError(f"corrente_picco: unità non compatibile con 'A' ({exc})") from None
    except (TypeError, ValueError):
        raise InputValidationError(f"corrente_picco: valore '{valore}' non numerico") from None
    if not math.isfinite(picco) or picco <= 0:
        raise InputValidationError(f"corrente_picco deve essere finita e positiva (ricevuta {picco})")
    return picco


def normalizza_richiesta(richiesta: CalculationRequest) -> ResolvedRequest:
    """
    Risolve alias e valori di default e valida la richiesta.

    Non modifica la richiesta del chiamante.

    Solleva:
        ConfigurationError per classi/funzioni sconosciute o combinazioni non ammesse
        InputValidationError per valori numerici non validi
    """
    classe = risolvi_classe(richiesta.tipo_impulso)
    info = IMPULSE_PARAMS[classe]

    if richiesta.funzione is None:
        funzione = info.funzione_default
    else:
        funzione = risolvi_funzione(richiesta.funzione)
    if funzione not in info.funzioni_ammesse:
        ammesse = [f.value for f in info.funzioni_ammesse]
        raise ConfigurationError(
            f"Combinazione non supportata: funzione '{funzione.value}' per la classe "
            f"{classe.value} ({info.designazione}). Ammesse: {ammesse}"
        )
    if funzione is FunctionType.BOTH:
        funzioni = (FunctionType.HEIDLER, FunctionType.DOUBLE_EXP)
    else:
        funzioni = (funzione,)

    if richiesta.corrente_picco is None:
        corrente_picco = REFERENCE_VALUES[classe].corrente_picco
    else:
        corrente_picco = _valida_corrente_picco(richiesta.corrente_picco)

    return ResolvedRequest(
        classe=classe,
        funzione=funzione,
        funzioni=funzioni,
        corrente_picco=corrente_picco,
        durata=interpreta_impostazione(richiesta.durata, "durata"),
        passo=interpreta_impostazione(richiesta.passo, "passo"),
        calcola_derivata=bool(richiesta.calcola_derivata),
    )


def calcola_impulso(richiesta: Optional[CalculationRequest] = None, **opzioni) -> ImpulseResults:
    """
    Calcola forme d'onda e parametri IEC per una richiesta.

    Parametri:
        richiesta: CalculationRequest (in alternativa, i suoi campi come keyword)

    Ritorna:
        ImpulseResults con una voce per funzione ("heidler", "double_exp",
        "damped_sine")

    Solleva:
        ConfigurationError, InputValidationError prima di qualsiasi calcolo
        ComputationError se la forma d'onda risulta degenere
    """
    if richiesta is None:
        richiesta = CalculationRequest(**opzioni)
    elif opzioni:
        raise ConfigurationError(
            f"Passare una CalculationRequest oppure i suoi campi come keyword, non entrambi "
            f"(ricevuti anche: {sorted(opzioni)})"
        )
    risolta = normalizza_richiesta(richiesta)
    classe = risolta.classe
    info = IMPULSE_PARAMS[classe]

    piano = pianifica_campionamento(classe, risolta.durata, risolta.passo)
    if piano.n_punti < 2:
        raise InputValidationError(
            f"Durata {piano.durata:.3e} s troppo breve per il passo {piano.passo:.3e} s: "
            f"servono almeno 2 campioni (ottenuti {piano.n_punti})"
        )

    risultati = {}
    for funzione in risolta.funzioni:
        inizio = time.perf_counter()
        corrente = genera_corrente(funzione, piano.tempo, risolta.corrente_picco, info)
        corrente.flags.writeable = False

        derivata = None
        if risolta.calcola_derivata:
            derivata = gradiente(corrente, piano.passo)
            derivata.flags.writeable = False

        parametri = calcola_parametri(piano.tempo, corrente, classe, derivata=derivata)
        risultati[funzione.value] = FunctionResult(
            funzione=funzione,
            etichetta=ETICHETTE_FUNZIONI[funzione],
            forma_onda=Waveform(tempo=piano.tempo, corrente=corrente, derivata=derivata),
            parametri=parametri,
        )
        logger.debug(
            "%s %s: %d punti in %.1f ms",
            classe.value, funzione.value, piano.n_punti, (time.perf_counter() - inizio) * 1e3,
        )

    return ImpulseResults(
        classe=classe,
        info=info,
        risultati=MappingProxyType(risultati),
        durata_utente=risolta.durata,
        durata_infinito=piano.durata_infinito,
        durata_effettiva=piano.durata,
        passo=piano.passo,
        n_punti=piano.n_punti,
        avvisi=piano.avvisi,
    )


def main(argv=None):
    """
    Funzione principale per calcolo da riga di comando.

    Eseguire con: python -m src.modules.impulse.calculator --tipo PEB --funzione both
    """
    import argparse

    parser = argparse.ArgumentParser(description="Calcolatore di impulsi di corrente IEC 62305-1")
    parser.add_argument("--tipo", default="PEB", help="Classe di impulso (PEB, NEB, NFB, SEB, SC)")
    parser.add_argument("--funzione", default=None, help="heidler, double_exp, both, damped_sine")
    parser.add_argument("--picco", type=float, default=None, help="Corrente di picco (kA)")
    parser.add_argument("--durata", default="infinity", help="Durata (s) oppure 'infinity'")
    parser.add_argument("--passo", default="auto", help="Passo temporale (s) oppure 'auto'")
    parser.add_argument("--derivata", action="store_true", help="Calcola di/dt")
    parser.add_argument("--plot", action="store_true", help="Mostra grafico")
    parser.add_argument("--verbose", action="store_true", help="Log di debug")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    richiesta = CalculationRequest(
        tipo_impulso=args.tipo,
        funzione=args.funzione,
        corrente_picco=Q_(args.picco, "kA") if args.picco is not None else None,
        durata=args.durata,
        passo=args.passo,
        calcola_derivata=args.derivata,
    )

    try:
        risultato = calcola_impulso(richiesta)
    except ImpulseError as exc:
        raise SystemExit(f"Errore di {exc.tipo}: {exc.dettaglio}")

    info = risultato.info
    print(f"Impulso: {info.nome} - {info.designazione} ({info.descrizione})")
    print(f"Durata: {formatta_grandezza(Q_(risultato.durata_effettiva, 's'), UNITA_TEMPO, cifre=1)} "
          f"(infinito: {formatta_grandezza(Q_(risultato.durata_infinito, 's'), UNITA_TEMPO, cifre=1)})")
    print(f"Passo: {formatta_grandezza(Q_(risultato.passo, 's'), 'ns', cifre=2)}, punti: {risultato.n_punti:,}")
    for avviso in risultato.avvisi:
        print(f"Attenzione: {avviso.message}")

    for r in risultato.risultati.values():
        g = r.parametri.grandezze
        print(f"\n{r.etichetta}:")
        print(f"  Corrente picco: {formatta_grandezza(g['corrente_picco'])} "
              f"a {formatta_grandezza(g['tempo_picco'], cifre=2)}")
        print(f"  Energia specifica: {formatta_grandezza(g['energia_specifica'])}")
        print(f"  Carica: {formatta_grandezza(g['carica'])}")
        print(f"  di/dt max: {formatta_grandezza(g['di_dt_max'], cifre=2)}")
        print(f"  T1/T2: {formatta_grandezza(g['tempo_fronte'], cifre=2)} / "
              f"{formatta_grandezza(g['tempo_emivalore'], cifre=1)}")

    if args.plot:
        try:
            import matplotlib.pyplot as plt

            n_assi = 2 if args.derivata else 1
            fig, axes = plt.subplots(n_assi, 1, figsize=(10, 4 * n_assi), sharex=True, squeeze=False)

            for r in risultato.risultati.values():
                forma = r.forma_onda
                axes[0][0].plot(forma.tempo * 1e6, forma.corrente / 1000, label=r.etichetta)
                if forma.derivata is not None:
                    axes[1][0].plot(forma.tempo * 1e6, forma.derivata / 1e9, label=r.etichetta)

            axes[0][0].set_ylabel("Corrente (kA)")
            axes[0][0].set_title(f"{info.nome} - {info.designazione}")
            axes[0][0].legend()
            if args.derivata:
                axes[1][0].set_ylabel("di/dt (kA/µs)")
            for ax in axes[:, 0]:
                ax.grid(True)
            axes[-1][0].set_xlabel("Tempo (µs)")

            plt.tight_layout()
            plt.show()

        except ImportError:
            print("\nMatplotlib non disponibile per grafico")


if __name__ == "__main__":
    main()
