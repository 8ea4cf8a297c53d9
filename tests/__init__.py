# Test suite per Impulse Current Calculator
"""
Suite di test per il calcolatore di impulsi di corrente.

Struttura:
    - unit/: Test unitari per singoli moduli e scenari end-to-end
"""
