# Test unitari per le funzioni della dashboard
"""
Test per la logica del form e dei grafici (senza avviare il server).
"""

import pytest
import numpy as np
import dash_bootstrap_components as dbc

from src.modules.impulse import ParameterSummary
from src.dashboard.app import (
    OPZIONI_IMPULSIVE,
    OPZIONI_OSCILLATORIE,
    create_app,
    crea_schede_parametri,
    esegui_calcolo,
    finestra_derivata,
    formatta_energia,
    indici_grafico,
    aggiorna_form,
)


class TestForm:
    """Test per aggiorna_form."""

    def test_sovratensione_bloccata(self):
        picco, opzioni, funzione, disabilitata, passo, _, _ = aggiorna_form("SC", "heidler")
        assert picco == pytest.approx(10.0)
        assert opzioni == OPZIONI_OSCILLATORIE
        assert funzione == "damped_sine"
        assert disabilitata is True
        assert passo == "auto"

    def test_ritorno_a_fulmine(self):
        """Lasciando la classe 8/20 µs la funzione torna su Heidler."""
        picco, opzioni, funzione, disabilitata, _, _, _ = aggiorna_form("NEB", "damped_sine")
        assert picco == pytest.approx(100.0)
        assert opzioni == OPZIONI_IMPULSIVE
        assert funzione == "heidler"
        assert disabilitata is False

    def test_funzione_mantenuta(self):
        assert aggiorna_form("NFB", "both")[2] == "both"


class TestGrafici:
    """Test per sottocampionamento e finestra di/dt."""

    def test_indici(self):
        indici = indici_grafico(10_000, 2000)
        assert indici[0] == 0
        assert np.all(np.diff(indici) == 5)

    def test_indici_pochi_punti(self):
        assert len(indici_grafico(50, 2000)) == 50

    def test_finestra_fulmine(self):
        indici = np.arange(1000)
        derivata = np.zeros(1000)
        derivata[20] = 1.0
        assert finestra_derivata(indici, indici * 1.0, derivata, oscillatoria=False) == 100

    def test_finestra_minima(self):
        """Almeno 10 punti oltre il massimo."""
        indici = np.arange(1000)
        derivata = np.zeros(1000)
        derivata[0] = 1.0
        assert finestra_derivata(indici, indici * 1.0, derivata, oscillatoria=False) == 10

    def test_finestra_oscillatoria(self):
        indici = np.arange(3000)
        derivata = np.zeros(3000)
        derivata[5] = -1.0
        assert finestra_derivata(indici, indici * 1.0, derivata, oscillatoria=True) == 1200

    def test_formatta_energia(self):
        assert formatta_energia(10e6) == "10.000 MJ/Ω"
        assert formatta_energia(0.05e6) == "50.00 kJ/Ω"

    def test_schede_usano_formatta_energia(self):
        """La scheda dell'energia mostra lo stesso testo del riepilogo."""
        for energia in (10e6, 0.05e6):
            parametri = ParameterSummary(200e3, 25e-6, energia, 100.0, 20e9)
            scheda = crea_schede_parametri(parametri).children[1]
            corpo = scheda.children[0].children[0].children
            valore, unita = corpo[1].children, corpo[2].children
            assert f"{valore} {unita}" == formatta_energia(energia)

    def test_schede_unita(self):
        parametri = ParameterSummary(200e3, 25e-6, 10e6, 100.0, 20e9)
        schede = crea_schede_parametri(parametri).children
        testi = [
            (s.children[0].children[0].children[1].children, s.children[0].children[0].children[2].children)
            for s in schede
        ]
        assert testi[0] == ("200.00", "kA")
        assert testi[2] == ("100.00", "C")
        assert testi[3] == ("20.0", "kA/µs")


class TestCalcolo:
    """Test per esegui_calcolo."""

    def test_errore(self):
        contenuto, stato = esegui_calcolo("SC", "damped_sine", -3, "infinity", "auto", [])
        assert contenuto is None
        assert isinstance(stato, dbc.Alert)
        assert stato.color == "danger"

    def test_successo(self):
        contenuto, stato = esegui_calcolo("SC", "damped_sine", 10, "infinity", "auto", ["derivata"])
        assert contenuto
        assert stato == []

    def test_avviso_limite_punti(self):
        contenuto, stato = esegui_calcolo("PEB", "heidler", 200, "infinity", "1e-12", [])
        assert contenuto
        assert len(stato) == 1
        assert stato[0].color == "warning"


def test_create_app():
    app = create_app()
    assert app.layout is not None
    assert len(app.callback_map) == 3
