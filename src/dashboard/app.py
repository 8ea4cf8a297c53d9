# Dashboard Impulse Current Calculator
"""
Applicazione Dash principale per il calcolatore di impulsi.

Permette di:
    - Selezionare la classe di impulso (PEB, NEB, NFB, SC)
    - Scegliere la funzione analitica (Heidler, doppio esponenziale, confronto)
    - Impostare corrente di picco, durata e passo temporale
    - Visualizzare forme d'onda, di/dt e parametri IEC

Il calcolo avviene nel callback del pulsante; dcc.Loading mostra
l'indicatore di attesa mentre il motore lavora.
"""

import dash
from dash import dcc, html, Input, Output, State
import dash_bootstrap_components as dbc
import plotly.graph_objects as go
import numpy as np

# Import moduli di calcolo
from ..core.catalog import IMPULSE_PARAMS, REFERENCE_VALUES, FunctionType, ShapeFamily, risolvi_classe
from ..core.errors import ImpulseError
from ..core.units import Q_, UNITA_CORRENTE, UNITA_ENERGIA_SPECIFICA, UNITA_TEMPO, formatta_grandezza
from ..modules.impulse import CalculationRequest, ImpulseResults, calcola_impulso


# Stili CSS
CARD_STYLE = {
    "margin": "10px",
    "padding": "15px",
    "borderRadius": "10px",
    "boxShadow": "0 4px 6px rgba(0, 0, 0, 0.1)",
}

HEADER_STYLE = {
    "backgroundColor": "#2c3e50",
    "color": "white",
    "padding": "20px",
    "marginBottom": "20px",
    "borderRadius": "0 0 10px 10px",
}

OPZIONI_TIPO = [
    {"label": "PEB - 10/350 µs (200 kA)", "value": "PEB"},
    {"label": "NEB - 1/200 µs (100 kA)", "value": "NEB"},
    {"label": "NFB - 0.25/100 µs (50 kA)", "value": "NFB"},
    {"label": "SC - 8/20 µs (10 kA)", "value": "SC"},
]

OPZIONI_IMPULSIVE = [
    {"label": "Heidler Function", "value": FunctionType.HEIDLER.value},
    {"label": "Double Exponential", "value": FunctionType.DOUBLE_EXP.value},
    {"label": "Both (Compare)", "value": FunctionType.BOTH.value},
]

OPZIONI_OSCILLATORIE = [
    {"label": "Damped Sine Wave", "value": FunctionType.DAMPED_SINE.value},
]

# Punti massimi per traccia nei grafici
PUNTI_GRAFICO = 2000

# Finestra di/dt per la classe oscillatoria (µs)
FINESTRA_DERIVATA_SC_US = 1200


def create_app():
    """Crea e configura l'applicazione Dash."""

    app = dash.Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        title="Impulse Current Calculator",
        suppress_callback_exceptions=True,
    )

    app.layout = create_layout()
    register_callbacks(app)

    return app


def create_layout():
    """Crea il layout della dashboard."""

    return dbc.Container([
        # Header
        html.Div([
            html.H1("Universal Impulse Current Calculator", className="text-center"),
            html.P(
                "Analisi di impulsi di corrente di fulmine secondo IEC 62305-1",
                className="text-center lead"
            ),
        ], style=HEADER_STYLE),

        dbc.Row([
            # Colonna sinistra: Parametri
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader(html.H5("Parametri di Ingresso")),
                    dbc.CardBody([
                        html.Label("Tipo di Impulso"),
                        dcc.Dropdown(
                            id="dropdown-tipo",
                            options=OPZIONI_TIPO,
                            value="PEB",
                            clearable=False,
                        ),
                        html.Small(id="descrizione-tipo", className="text-muted"),
                        html.Br(),
                        html.Br(),

                        html.Label("Funzione"),
                        dcc.Dropdown(
                            id="dropdown-funzione",
                            options=OPZIONI_IMPULSIVE,
                            value=FunctionType.HEIDLER.value,
                            clearable=False,
                        ),
                        html.Br(),

                        html.Label("Corrente di Picco (kA)"),
                        dbc.Input(
                            id="input-picco",
                            type="number",
                            value=200,
                            min=0.1,
                            step=0.1,
                        ),
                        html.Br(),

                        dbc.Checklist(
                            id="check-derivata",
                            options=[{"label": "Mostra di/dt (ripidità)", "value": "derivata"}],
                            value=[],
                            switch=True,
                        ),
                        html.Br(),

                        dbc.Button(
                            "Opzioni Avanzate",
                            id="btn-avanzate",
                            color="link",
                            size="sm",
                        ),
                        dbc.Collapse([
                            html.Label("Durata (s)"),
                            dbc.Input(id="input-durata", type="text", value="infinity"),
                            html.Small('"infinity" = calcolo automatico', className="text-muted"),
                            html.Br(),
                            html.Label("Passo Temporale (s)"),
                            dbc.Input(id="input-passo", type="text", value="auto"),
                            html.Small(
                                "auto: NFB 1.5 ns | NEB 2.5 ns | PEB 20 ns | SC 15 ns",
                                className="text-muted",
                            ),
                        ], id="collapse-avanzate", is_open=False),
                    ]),
                ], style=CARD_STYLE),

                # Pulsante Calcolo
                dbc.Card([
                    dbc.CardBody([
                        dbc.Button(
                            "Calcola",
                            id="btn-calcola",
                            color="primary",
                            size="lg",
                            className="w-100",
                        ),
                        html.Br(),
                        html.Br(),
                        html.Div(id="info-selezione", className="small"),
                    ]),
                ], style=CARD_STYLE),
            ], width=3),

            # Colonna destra: Risultati
            dbc.Col([
                dcc.Loading(
                    id="loading",
                    type="circle",
                    children=[
                        html.Div(id="output-status"),
                        html.Div(
                            id="output-risultati",
                            children=html.P(
                                "Configura i parametri e premi Calcola",
                                className="text-center text-muted",
                            ),
                        ),
                    ],
                ),
            ], width=9),
        ]),

        # Footer
        html.Footer([
            html.Hr(),
            html.P(
                "Basato sulle norme IEC 62305-1 | Modelli di Heidler, doppio esponenziale e sinusoide smorzata",
                className="text-center text-muted"
            ),
        ]),

    ], fluid=True)


def aggiorna_form(tipo, funzione_corrente):
    """
    Aggiorna il form al cambio di classe di impulso.

    Reimposta la corrente di picco al valore di riferimento, blocca la
    funzione sulla sinusoide smorzata per la classe 8/20 µs (o torna a
    Heidler lasciandola) e riporta il passo temporale su "auto".

    Ritorna:
        Tuple (picco_kA, opzioni_funzione, funzione, funzione_disabilitata,
               passo, descrizione, info_selezione)
    """
    classe = risolvi_classe(tipo)
    info = IMPULSE_PARAMS[classe]
    picco_kA = Q_(REFERENCE_VALUES[classe].corrente_picco, "A").to(UNITA_CORRENTE).magnitude

    if info.famiglia is ShapeFamily.OSCILLATORIA:
        opzioni = OPZIONI_OSCILLATORIE
        funzione = FunctionType.DAMPED_SINE.value
        disabilitata = True
    else:
        opzioni = OPZIONI_IMPULSIVE
        ammesse = [o["value"] for o in OPZIONI_IMPULSIVE]
        funzione = funzione_corrente if funzione_corrente in ammesse else FunctionType.HEIDLER.value
        disabilitata = False

    selezione = [html.Strong("Selezione corrente: "), f"{info.nome} ({info.designazione})"]
    return picco_kA, opzioni, funzione, disabilitata, "auto", info.descrizione, selezione


def indici_grafico(n_punti, max_punti=PUNTI_GRAFICO):
    """Indici di sottocampionamento (un punto ogni N) per i grafici."""
    fattore = max(1, n_punti // max_punti)
    return np.arange(0, n_punti, fattore)


def finestra_derivata(indici, tempo_us, derivata, oscillatoria):
    """
    Numero di punti sottocampionati da mostrare nel grafico di/dt.

    Impulsi di fulmine: fino a 5 volte l'indice del massimo di |di/dt|.
    Sovratensione: fino a 1200 µs. Almeno 10 punti oltre il massimo.
    """
    idx_max = int(np.argmax(np.abs(derivata)))
    pos_max = int(np.searchsorted(indici, idx_max))

    if oscillatoria:
        oltre = np.nonzero(tempo_us >= FINESTRA_DERIVATA_SC_US)[0]
        fine = int(oltre[0]) if oltre.size and oltre[0] > 0 else len(tempo_us) - 1
    else:
        fine = min(pos_max * 5, len(indici) - 1)

    return max(fine, pos_max + 10)


def crea_grafico_corrente(risultato):
    """Crea il grafico della corrente (kA) in funzione del tempo (µs)."""
    forma = risultato.forma_onda
    indici = indici_grafico(len(forma.tempo))

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=forma.tempo[indici] * 1e6,
        y=forma.corrente[indici] / 1e3,
        mode="lines",
        name="Corrente",
        line=dict(color="rgb(37, 99, 235)", width=2),
    ))

    fig.update_layout(
        title=f"{risultato.etichetta} Function",
        xaxis_title="Tempo (µs)",
        yaxis_title="Corrente (kA)",
        margin=dict(l=40, r=40, t=40, b=40),
    )
    fig.update_xaxes(range=[0, forma.tempo[indici[-1]] * 1e6])

    return fig


def crea_grafico_derivata(risultato, oscillatoria):
    """Crea il grafico di di/dt (kA/µs) zoomato sul fronte."""
    forma = risultato.forma_onda
    indici = indici_grafico(len(forma.tempo))
    tempo_us = forma.tempo[indici] * 1e6
    n = finestra_derivata(indici, tempo_us, forma.derivata, oscillatoria)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=tempo_us[:n],
        y=forma.derivata[indici][:n] / 1e9,
        mode="lines",
        name="di/dt",
        line=dict(color="rgb(34, 197, 94)", width=2),
    ))

    fig.update_layout(
        title="Ripidità di corrente (di/dt)",
        xaxis_title="Tempo (µs)",
        yaxis_title="di/dt (kA/µs)",
        margin=dict(l=40, r=40, t=40, b=40),
    )

    return fig


def formatta_energia(energia_specifica):
    """Energia specifica (J/Ω) in MJ/Ω oppure kJ/Ω sotto 1 MJ/Ω."""
    grandezza = Q_(energia_specifica, "J/ohm")
    if energia_specifica >= 1e6:
        return formatta_grandezza(grandezza, UNITA_ENERGIA_SPECIFICA)
    return formatta_grandezza(grandezza, "kJ/ohm", cifre=2)


def crea_schede_parametri(parametri):
    """Schede riassuntive dei parametri del primo risultato."""
    g = parametri.grandezze

    def scheda(titolo, testo):
        valore, unita = testo.split(" ", 1)
        return dbc.Col([
            dbc.Card([
                dbc.CardBody([
                    html.H6(titolo, className="text-muted"),
                    html.P(valore, className="h4"),
                    html.Small(unita, className="text-muted"),
                ]),
            ], style=CARD_STYLE),
        ], width=3)

    return dbc.Row([
        scheda("Corrente di Picco", formatta_grandezza(g["corrente_picco"], cifre=2)),
        scheda("Energia Specifica", formatta_energia(parametri.energia_specifica)),
        scheda("Carica", formatta_grandezza(g["carica"], cifre=2)),
        scheda("Ripidità Massima", formatta_grandezza(g["di_dt_max"], cifre=1)),
    ])


def crea_riepilogo(risultati: ImpulseResults):
    """Crea il contenuto della colonna risultati."""
    info = risultati.info
    oscillatoria = info.famiglia is ShapeFamily.OSCILLATORIA
    primo = next(iter(risultati.risultati.values()))

    contenuto = [
        dbc.Card([
            dbc.CardBody([
                html.H2(info.nome),
                html.P(info.designazione, className="text-muted"),
                html.Small(
                    f"Durata {formatta_grandezza(Q_(risultati.durata_effettiva, 's'), UNITA_TEMPO, cifre=1)} | "
                    f"passo {formatta_grandezza(Q_(risultati.passo, 's'), 'ns', cifre=2)} | "
                    f"{risultati.n_punti:,} punti"
                ),
            ]),
        ], style=CARD_STYLE),
        crea_schede_parametri(primo.parametri),
    ]

    for risultato in risultati.risultati.values():
        par = risultato.parametri
        g = par.grandezze
        corpo = [
            dcc.Graph(figure=crea_grafico_corrente(risultato), style={"height": "400px"}),
            dbc.Row([
                dbc.Col(f"Picco: {formatta_grandezza(g['corrente_picco'])}", width=3),
                dbc.Col(f"Energia: {formatta_energia(par.energia_specifica)}", width=3),
                dbc.Col(f"Carica: {formatta_grandezza(g['carica'])}", width=3),
                dbc.Col(f"di/dt: {formatta_grandezza(g['di_dt_max'], cifre=2)}", width=3),
            ]),
        ]
        if risultato.forma_onda.derivata is not None:
            corpo.append(dcc.Graph(
                figure=crea_grafico_derivata(risultato, oscillatoria),
                style={"height": "300px"},
            ))
        contenuto.append(dbc.Card([dbc.CardBody(corpo)], style=CARD_STYLE))

    return contenuto


def esegui_calcolo(tipo, funzione, picco_kA, durata, passo, opzioni_derivata):
    """
    Esegue il calcolo dal form e prepara l'output.

    Ritorna:
        Tuple (contenuto_risultati, stato); in caso di errore il contenuto
        è None e lo stato è un dbc.Alert con il messaggio del motore
    """
    richiesta = CalculationRequest(
        tipo_impulso=tipo,
        funzione=funzione,
        corrente_picco=Q_(picco_kA, "kA") if picco_kA is not None else None,
        durata=durata,
        passo=passo,
        calcola_derivata="derivata" in (opzioni_derivata or []),
    )

    try:
        risultati = calcola_impulso(richiesta)
    except ImpulseError as exc:
        return None, dbc.Alert(f"Errore di calcolo ({exc.tipo}): {exc.dettaglio}", color="danger")

    stato = [dbc.Alert(a.message, color="warning") for a in risultati.avvisi]
    return crea_riepilogo(risultati), stato


def register_callbacks(app):
    """Registra i callback della dashboard."""

    @app.callback(
        [
            Output("input-picco", "value"),
            Output("dropdown-funzione", "options"),
            Output("dropdown-funzione", "value"),
            Output("dropdown-funzione", "disabled"),
            Output("input-passo", "value"),
            Output("descrizione-tipo", "children"),
            Output("info-selezione", "children"),
        ],
        [Input("dropdown-tipo", "value")],
        [State("dropdown-funzione", "value")],
    )
    def cambia_tipo(tipo, funzione):
        return aggiorna_form(tipo, funzione)

    @app.callback(
        Output("collapse-avanzate", "is_open"),
        [Input("btn-avanzate", "n_clicks")],
        [State("collapse-avanzate", "is_open")],
        prevent_initial_call=True,
    )
    def mostra_avanzate(n_clicks, aperto):
        return not aperto

    @app.callback(
        [
            Output("output-risultati", "children"),
            Output("output-status", "children"),
        ],
        [Input("btn-calcola", "n_clicks")],
        [
            State("dropdown-tipo", "value"),
            State("dropdown-funzione", "value"),
            State("input-picco", "value"),
            State("input-durata", "value"),
            State("input-passo", "value"),
            State("check-derivata", "value"),
        ],
        prevent_initial_call=True,
    )
    def calcola(n_clicks, tipo, funzione, picco_kA, durata, passo, opzioni_derivata):
        """Esegue il calcolo e aggiorna i grafici."""
        contenuto, stato = esegui_calcolo(tipo, funzione, picco_kA, durata, passo, opzioni_derivata)
        if contenuto is None:
            return dash.no_update, stato
        return contenuto, stato


def run_dashboard(host="127.0.0.1", port=8050, debug=True):
    """Avvia la dashboard."""
    app = create_app()
    print(f"\n{'='*50}")
    print("Impulse Current Calculator Dashboard")
    print(f"{'='*50}")
    print(f"Apri il browser a: http://{host}:{port}")
    print(f"{'='*50}\n")
    app.run(host=host, port=port, debug=debug)


def main(argv=None):
    """Entry point da riga di comando: python -m src.dashboard.app"""
    import argparse

    parser = argparse.ArgumentParser(description="Dashboard calcolatore di impulsi")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--no-debug", action="store_true", help="Disattiva la modalità debug di Dash")
    args = parser.parse_args(argv)

    run_dashboard(host=args.host, port=args.port, debug=not args.no_debug)


# Entry point per esecuzione diretta
if __name__ == "__main__":
    main()
