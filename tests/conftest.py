# Configurazione pytest e fixture comuni
"""
Fixture e configurazione per i test del calcolatore di impulsi.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Aggiungi la root del progetto al path per gli import "src.*"
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))


@pytest.fixture
def unita():
    """Fixture per il registry delle unità Pint."""
    from src.core.units import ureg, Q_

    return ureg, Q_


@pytest.fixture
def info_peb():
    """Metadati e costanti di forma della classe 10/350 µs."""
    from src.core.catalog import IMPULSE_PARAMS, ImpulseClass

    return IMPULSE_PARAMS[ImpulseClass.PEB]


@pytest.fixture
def info_seb():
    """Metadati e costanti di forma della classe 8/20 µs."""
    from src.core.catalog import IMPULSE_PARAMS, ImpulseClass

    return IMPULSE_PARAMS[ImpulseClass.SEB]


@pytest.fixture
def tempo_peb():
    """
    Griglia dei tempi per la classe PEB.

    Passo 20 ns, durata 1 ms → 50000 punti.
    """
    return np.arange(50_000) * 2e-8


@pytest.fixture
def tempo_seb():
    """
    Griglia dei tempi per la classe SEB.

    Passo 15 ns, durata 120 µs → 8000 punti.
    """
    return np.arange(8_000) * 1.5e-8


@pytest.fixture
def risultato_peb_heidler():
    """
    Calcolo di riferimento PEB con funzione di Heidler.

    I = 200 kA, durata e passo automatici (3.395 ms, 20 ns).
    """
    from src.modules.impulse import CalculationRequest, calcola_impulso

    return calcola_impulso(
        CalculationRequest(
            tipo_impulso="PEB",
            funzione="heidler",
            corrente_picco=200e3,
            durata="auto",
            passo="auto",
        )
    )
