# Nucleo numerico: integrazione e derivata
"""
Integrazione con la regola dei trapezi e derivata numerica a differenze finite
su campioni a passo uniforme.

    ∫ y dx ≈ Σ (y[k] + y[k+1]) · dx / 2

    dy/dx[0]   = (y[1] - y[0]) / dx                (differenza in avanti)
    dy/dx[k]   = (y[k+1] - y[k-1]) / (2·dx)        (differenza centrale)
    dy/dx[N-1] = (y[N-1] - y[N-2]) / dx            (differenza all'indietro)
"""

from typing import Tuple
import numpy as np

from ...core.errors import ComputationError


def integra_trapezi(y: np.ndarray, dx: float) -> float:
    """
    Integrale di y con la regola dei trapezi a passo uniforme.

    Parametri:
        y: Campioni da integrare
        dx: Passo tra i campioni

    Ritorna:
        Valore dell'integrale (0 per meno di due campioni)
    """
    y = np.asarray(y, dtype=float)
    if y.size <= 1:
        return 0.0
    return float(np.trapezoid(y, dx=dx))


def gradiente(y: np.ndarray, dx: float) -> np.ndarray:
    """
    Derivata numerica di y, stessa lunghezza dell'ingresso.

    Parametri:
        y: Campioni (almeno 2)
        dx: Passo tra i campioni

    Ritorna:
        Array della derivata

    Solleva:
        ComputationError se y ha meno di due campioni
    """
    y = np.asarray(y, dtype=float)
    if y.size < 2:
        raise ComputationError(
            f"Derivata non definita su {y.size} campioni (servono almeno 2)"
        )
    # edge_order=1: differenze in avanti/all'indietro agli estremi
    return np.gradient(y, dx, edge_order=1)


def massimo_assoluto(y: np.ndarray) -> Tuple[float, int]:
    """
    Massimo di |y| e indice della prima occorrenza.

    Ritorna:
        Tuple (massimo, indice); (0.0, 0) per un array vuoto
    """
    y = np.asarray(y, dtype=float)
    if y.size == 0:
        return 0.0, 0
    modulo = np.abs(y)
    idx = int(np.argmax(modulo))
    return float(modulo[idx]), idx
