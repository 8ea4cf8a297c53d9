# Modulo Dashboard
"""
Dashboard interattiva per il calcolatore di impulsi.

Interfaccia grafica basata su Plotly Dash che usa il motore di calcolo
come consumatore esterno: costruisce la richiesta dal form e visualizza
gli array e i parametri restituiti.

Funzionalità:
    - Selezione classe di impulso e funzione analitica
    - Corrente di picco, durata e passo temporale
    - Grafici di corrente e di/dt
    - Parametri IEC (picco, energia specifica, carica, ripidità)

Esecuzione:
    python -m src.dashboard.app
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
