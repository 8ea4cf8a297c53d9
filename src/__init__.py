# Impulse Current Calculator
# Calcolatore di impulsi di corrente di fulmine secondo IEC 62305-1
"""
Modulo principale del calcolatore di impulsi di corrente.

Questo pacchetto genera forme d'onda normalizzate di corrente di fulmine
(10/350, 1/200, 0.25/100 µs) e di sovratensione (8/20 µs) e ne calcola i
parametri caratteristici: corrente di picco, energia specifica, carica e
ripidità massima.

Moduli:
    - core: Unità di misura, catalogo impulsi, costanti, errori
    - modules.impulse: Motore di calcolo
    - dashboard: Interfaccia grafica Dash
"""

__version__ = "0.1.0"
__author__ = "Impulse Calculator Team"
