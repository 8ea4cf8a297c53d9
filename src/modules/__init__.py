# Moduli di calcolo
"""
Moduli di calcolo del calcolatore di impulsi.

Sottomoduli:
    - impulse: Forme d'onda, campionamento e parametri IEC 62305-1
"""
