# Sistema di unità di misura per il calcolatore di impulsi
"""
Sistema di unità di misura basato su Pint.

Il motore di calcolo lavora internamente in unità SI pure (A, s, C, J/Ω)
su array NumPy. Pint viene usato ai bordi: per accettare grandezze fornite
dal chiamante (es. Q_(200, "kA")) e per convertire i risultati nelle unità
di visualizzazione tipiche delle norme IEC 62305 (kA, MJ/Ω, kA/µs).

Uso tipico:
    from src.core.units import ureg, Q_

    picco = Q_(200, "kA")
    durata = Q_(3.395, "ms")

    in_si(picco, "A")        # 200000.0
    in_si(2e5, "A")          # 200000.0 (i float sono già SI)

Riferimenti:
    - Pint documentation: https://pint.readthedocs.io/
"""

import pint

# Creare il registry delle unità
ureg = pint.UnitRegistry()

# Alias per comodità - Quantity constructor
Q_ = ureg.Quantity

# Configurazione per output più leggibile
ureg.formatter.default_format = "~P"  # Formato compatto con simboli


def in_si(valore, unita_si: str) -> float:
    """
    Converte un valore in magnitudine SI.

    Parametri:
        valore: float (già in SI) oppure grandezza Pint
        unita_si: Unità SI di destinazione (es. "A", "s")

    Ritorna:
        Magnitudine float nell'unità richiesta

    Solleva:
        pint.DimensionalityError se la grandezza non è compatibile
    """
    if isinstance(valore, pint.Quantity):
        return float(valore.to(unita_si).magnitude)
    return float(valore)


def formatta_grandezza(grandezza: pint.Quantity, unita_output=None, cifre: int = 3) -> str:
    """
    Formatta una grandezza fisica per output leggibile.

    Parametri:
        grandezza: Grandezza Pint
        unita_output: Unità di visualizzazione (stringa o unità Pint)
        cifre: Cifre decimali

    Esempio:
        >>> formatta_grandezza(Q_(200000, "A"), UNITA_CORRENTE)
        '200.000 kA'
    """
    if unita_output is not None:
        grandezza = grandezza.to(unita_output)
    return f"{grandezza:~.{cifre}fP}"


# Unità di visualizzazione IEC 62305
UNITA_CORRENTE = ureg.kiloampere
UNITA_TEMPO = ureg.microsecond
UNITA_ENERGIA_SPECIFICA = ureg.megajoule / ureg.ohm
UNITA_CARICA = ureg.coulomb
UNITA_PENDENZA = ureg.kiloampere / ureg.microsecond
