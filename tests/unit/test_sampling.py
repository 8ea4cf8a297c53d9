# Test unitari per il pianificatore del campionamento
"""
Test per l'interpretazione di durata e passo, i valori automatici per classe
e il limite sul numero di punti.
"""

import pytest
import numpy as np

from src.core.catalog import ImpulseClass
from src.core.constants import SamplingParameters
from src.core.errors import InputValidationError, Level
from src.modules.impulse import (
    Auto,
    Explicit,
    calcola_durata_infinito,
    interpreta_impostazione,
    pianifica_campionamento,
)


class TestInterpretazione:
    """Test per interpreta_impostazione."""

    @pytest.mark.parametrize("valore", [None, "auto", "AUTO", "infinity", " Infinity ", Auto()])
    def test_token_auto(self, valore):
        assert isinstance(interpreta_impostazione(valore), Auto)

    @pytest.mark.parametrize("valore,atteso", [(1e-3, 1e-3), ("2e-6", 2e-6), (5, 5.0), (Explicit(3e-9), 3e-9)])
    def test_valori_espliciti(self, valore, atteso):
        risultato = interpreta_impostazione(valore)
        assert isinstance(risultato, Explicit)
        assert risultato.valore == pytest.approx(atteso)

    def test_grandezza_pint(self, unita):
        _, Q_ = unita
        risultato = interpreta_impostazione(Q_(500, "us"), "durata")
        assert risultato.valore == pytest.approx(500e-6)

    def test_unita_incompatibile(self, unita):
        _, Q_ = unita
        with pytest.raises(InputValidationError):
            interpreta_impostazione(Q_(3, "A"), "passo")

    @pytest.mark.parametrize("valore", [0, -1e-6, float("nan"), float("inf"), "abc", True, [1, 2]])
    def test_valori_non_validi(self, valore):
        with pytest.raises(InputValidationError) as exc_info:
            interpreta_impostazione(valore, "durata")
        assert exc_info.value.tipo == "input"
        assert "durata" in exc_info.value.dettaglio


class TestValoriAutomatici:
    """Test per durata e passo automatici."""

    @pytest.mark.parametrize(
        "classe,durata",
        [
            (ImpulseClass.PEB, 7 * 485e-6),
            (ImpulseClass.NEB, 7 * 285e-6),
            (ImpulseClass.NFB, 7 * 143.4e-6),
            (ImpulseClass.SEB, 5 * 24e-6),
        ],
    )
    def test_durata_infinito(self, classe, durata):
        assert calcola_durata_infinito(classe) == pytest.approx(durata)

    @pytest.mark.parametrize(
        "classe,passo",
        [
            (ImpulseClass.NFB, 1.5e-9),
            (ImpulseClass.NEB, 2.5e-9),
            (ImpulseClass.PEB, 20e-9),
            (ImpulseClass.SEB, 15e-9),
        ],
    )
    def test_passo_auto(self, classe, passo):
        piano = pianifica_campionamento(classe, Explicit(1e-5), Auto())
        assert piano.passo == pytest.approx(passo)
        assert not piano.avvisi

    def test_peb_automatico(self):
        """PEB: 3.395 ms a 20 ns, circa 169750 punti."""
        piano = pianifica_campionamento(ImpulseClass.PEB)
        assert piano.durata == pytest.approx(3.395e-3)
        assert piano.passo == pytest.approx(2e-8)
        assert piano.n_punti == pytest.approx(169_750, abs=1)
        assert not piano.passo_allargato

    def test_seb_automatico(self):
        piano = pianifica_campionamento(ImpulseClass.SEB)
        assert piano.durata == pytest.approx(120e-6)
        assert piano.n_punti == pytest.approx(8_000, abs=1)


class TestGriglia:
    """Test per la griglia dei tempi."""

    def test_uniforme_da_zero(self):
        piano = pianifica_campionamento(ImpulseClass.SEB, Explicit(1e-6), Explicit(1e-8))
        assert piano.tempo[0] == 0.0
        assert len(piano.tempo) == piano.n_punti
        assert np.allclose(np.diff(piano.tempo), 1e-8)
        assert piano.tempo[-1] < piano.durata

    def test_sola_lettura(self):
        piano = pianifica_campionamento(ImpulseClass.SEB, Explicit(1e-6), Explicit(1e-8))
        with pytest.raises(ValueError):
            piano.tempo[0] = 1.0

    def test_finestra_vuota(self):
        """Durata inferiore al passo: nessun campione, nessun errore qui."""
        piano = pianifica_campionamento(ImpulseClass.PEB, Explicit(1e-9), Explicit(1e-8))
        assert piano.n_punti == 0
        assert piano.tempo.size == 0


class TestLimitePunti:
    """Test per l'allargamento del passo oltre il limite di punti."""

    def test_passo_allargato(self):
        piano = pianifica_campionamento(ImpulseClass.PEB, Auto(), Explicit(1e-12))
        assert piano.n_punti <= SamplingParameters.MAX_PUNTI
        assert piano.passo == pytest.approx(3.395e-9)
        assert piano.passo_richiesto == pytest.approx(1e-12)
        assert piano.passo_allargato
        assert piano.durata == pytest.approx(3.395e-3)

    def test_avviso(self):
        piano = pianifica_campionamento(ImpulseClass.PEB, Auto(), Explicit(1e-12))
        assert len(piano.avvisi) == 1
        avviso = piano.avvisi[0]
        assert avviso.level is Level.WARNING
        assert avviso.code == "passo_allargato"
        assert avviso.field == "passo"

    def test_avviso_nel_log(self, caplog):
        with caplog.at_level("WARNING", logger="src.modules.impulse.sampling"):
            pianifica_campionamento(ImpulseClass.PEB, Auto(), Explicit(1e-12))
        assert "allargato" in caplog.text

    def test_limite_personalizzato(self):
        piano = pianifica_campionamento(ImpulseClass.SEB, Auto(), Auto(), max_punti=100)
        assert piano.n_punti <= 100
        assert piano.passo == pytest.approx(120e-6 / 100)
