# Errori e avvisi del calcolatore di impulsi
"""
Tipi condivisi per riportare errori e avvisi al livello di presentazione.

Gli errori sono eccezioni con un tipo (configurazione, input, calcolo) e
un dettaglio leggibile. Gli avvisi non bloccanti (es. passo temporale
allargato per restare nel limite di punti) sono record Issue restituiti
insieme ai risultati.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ImpulseError(Exception):
    """
    Errore base del motore di calcolo.

    Attributi:
        tipo: Categoria dell'errore ("configurazione", "input", "calcolo")
        dettaglio: Messaggio leggibile
    """

    tipo = "generico"

    def __init__(self, dettaglio: str):
        super().__init__(dettaglio)
        self.dettaglio = dettaglio

    def to_dict(self) -> dict:
        return {"tipo": self.tipo, "dettaglio": self.dettaglio}


class ConfigurationError(ImpulseError, ValueError):
    """Classe di impulso o funzione non riconosciuta, o combinazione non ammessa."""

    tipo = "configurazione"


class InputValidationError(ImpulseError, ValueError):
    """Valore numerico non positivo, non finito o non interpretabile."""

    tipo = "input"


class ComputationError(ImpulseError, RuntimeError):
    """Violazione di un invariante durante il calcolo (es. forma d'onda nulla)."""

    tipo = "calcolo"


class Level(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Issue:
    level: Level
    code: str
    message: str
    field: Optional[str] = None
