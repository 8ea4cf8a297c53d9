# Test unitari per l'estrazione dei parametri
"""
Test per picco, energia specifica, carica, ripidità e tempi caratteristici.
"""

import math

import pytest
import numpy as np

from src.core.catalog import ImpulseClass
from src.core.errors import ComputationError
from src.modules.impulse import (
    ParameterSummary,
    calcola_parametri,
    calcola_tempi_caratteristici,
    funzione_heidler,
)


class TestPicco:
    """Test per corrente e tempo di picco."""

    def test_prima_occorrenza(self):
        t = np.arange(5) * 1.0
        i = np.array([0.0, 5.0, -5.0, 5.0, 1.0])
        par = calcola_parametri(t, i, ImpulseClass.PEB)
        assert par.corrente_picco == 5.0
        assert par.tempo_picco == 1.0

    def test_picco_negativo(self):
        """Il picco è sul modulo: un minimo negativo può essere il picco."""
        t = np.arange(4) * 1.0
        par = calcola_parametri(t, np.array([0.0, 1.0, -3.0, 0.0]), ImpulseClass.SEB)
        assert par.corrente_picco == 3.0
        assert par.tempo_picco == 2.0


class TestIntegrali:
    """Test per energia specifica e carica."""

    def test_costante(self):
        """i = 2 A per 1 s: W/R = 4, Q = 2."""
        t = np.linspace(0, 1, 1001)
        par = calcola_parametri(t, np.full(1001, 2.0), ImpulseClass.PEB)
        assert par.energia_specifica == pytest.approx(4.0)
        assert par.carica == pytest.approx(2.0)
        assert par.di_dt_max == pytest.approx(0.0, abs=1e-9)

    def test_carica_bipolare_e_unipolare(self):
        """Su un periodo di seno la carica con segno è ~0, quella sul modulo ~4."""
        t = np.linspace(0, 2 * math.pi, 20001)
        i = np.sin(t)
        bipolare = calcola_parametri(t, i, ImpulseClass.SEB)
        unipolare = calcola_parametri(t, i, ImpulseClass.PEB)
        assert bipolare.carica == pytest.approx(4.0, rel=1e-4)
        assert unipolare.carica == pytest.approx(0.0, abs=1e-6)
        assert bipolare.energia_specifica == pytest.approx(math.pi, rel=1e-4)
        assert unipolare.energia_specifica == pytest.approx(bipolare.energia_specifica)


class TestRipidita:
    """Test per di/dt."""

    def test_rampa(self):
        """i = 3·10⁹ t: di/dt costante."""
        t = np.arange(100) * 1e-8
        par = calcola_parametri(t, 3e9 * t, ImpulseClass.NFB)
        assert par.di_dt_max == pytest.approx(3e9)

    def test_derivata_riusata(self):
        """Se fornita, la derivata non viene ricalcolata."""
        t = np.arange(10) * 1.0
        derivata = np.zeros(10)
        derivata[4] = -7.0
        par = calcola_parametri(t, t.copy(), ImpulseClass.PEB, derivata=derivata)
        assert par.di_dt_max == 7.0


class TestErrori:
    """Test per ingressi degeneri."""

    @pytest.mark.parametrize("n", [0, 1])
    def test_meno_di_due_campioni(self, n):
        with pytest.raises(ComputationError):
            calcola_parametri(np.zeros(n), np.zeros(n), ImpulseClass.PEB)

    def test_lunghezze_diverse(self):
        with pytest.raises(ComputationError):
            calcola_parametri(np.arange(5) * 1.0, np.zeros(4), ImpulseClass.PEB)


class TestTempiCaratteristici:
    """Test per T1 e T2."""

    def test_peb_10_350(self, info_peb):
        p = info_peb.heidler
        t = np.arange(150_000) * 2e-8
        i = funzione_heidler(t, 200e3, p.tau1, p.tau2, p.eta, p.n)
        t1, t2 = calcola_tempi_caratteristici(t, i)
        assert t1 == pytest.approx(10e-6, rel=0.1)
        assert t2 == pytest.approx(350e-6, rel=0.1)

    def test_coda_fuori_finestra(self, info_peb):
        """Finestra troppo corta: T2 non misurabile."""
        p = info_peb.heidler
        t = np.arange(2_000) * 2e-8
        i = funzione_heidler(t, 200e3, p.tau1, p.tau2, p.eta, p.n)
        t1, t2 = calcola_tempi_caratteristici(t, i)
        assert math.isnan(t2)

    def test_forma_nulla(self):
        t1, t2 = calcola_tempi_caratteristici(np.arange(3) * 1.0, np.zeros(3))
        assert math.isnan(t1) and math.isnan(t2)


class TestSerializzazione:
    """Test per ParameterSummary.to_dict."""

    def test_conversioni(self):
        par = ParameterSummary(
            corrente_picco=200e3,
            tempo_picco=25e-6,
            energia_specifica=10e6,
            carica=100.0,
            di_dt_max=20e9,
            tempo_fronte=10e-6,
            tempo_emivalore=350e-6,
        )
        d = par.to_dict()
        assert d["I_peak"] == 200e3
        assert d["I_peak_kA"] == pytest.approx(200.0)
        assert d["W_R_MJ"] == pytest.approx(10.0)
        assert d["Q"] == 100.0
        assert d["di_dt_max_kA_us"] == pytest.approx(20.0)
        assert d["T1_us"] == pytest.approx(10.0)
        assert d["T2_us"] == pytest.approx(350.0)

    def test_grandezze_pint(self):
        par = ParameterSummary(1e3, 1e-6, 1.0, 1.0, 1e6)
        assert par.grandezze["corrente_picco"].magnitude == pytest.approx(1.0)
        assert math.isnan(par.to_dict()["T1_us"])
