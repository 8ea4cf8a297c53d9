# Costanti di campionamento per il calcolatore di impulsi
"""
Costanti numeriche del pianificatore di campionamento.

I valori del passo temporale automatico sono scelti in modo che il fronte
di salita di ogni forma d'onda riceva qualche centinaio di campioni e che
la durata "infinito" (7·τ2 oppure 5·τ) resti sotto il limite di punti:

    Classe   τ        durata auto    passo     punti
    NFB      143.4 µs  1.004 ms      1.5 ns    ~669k
    NEB      285 µs    1.995 ms      2.5 ns    ~798k
    PEB      485 µs    3.395 ms      20 ns     ~170k
    SEB      24 µs     120 µs        15 ns     ~8k
"""

from .catalog import ImpulseClass, ShapeFamily


class SamplingParameters:
    """Parametri del pianificatore di campionamento."""

    # Numero massimo di campioni per forma d'onda
    MAX_PUNTI = 1_000_000

    # Moltiplicatori per la durata "infinito"
    MOLTIPLICATORE_DURATA = {
        ShapeFamily.IMPULSIVA: 7,
        ShapeFamily.OSCILLATORIA: 5,
    }

    # Durata di riserva se la classe non ha una costante di coda (s)
    DURATA_DEFAULT = 1e-3

    # Passo temporale automatico per classe (s)
    PASSO_AUTO = {
        ImpulseClass.NFB: 1.5e-9,
        ImpulseClass.NEB: 2.5e-9,
        ImpulseClass.PEB: 2e-8,
        ImpulseClass.SEB: 1.5e-8,
    }
    PASSO_DEFAULT = 1e-8
