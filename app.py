"""
Sales Performance Dashboard: Interactive Dashboard

Run with:  streamlit run app.py
"""

import base64
import logging
import sys
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go

sys.path.insert(0, str(Path(__file__).resolve().parent))

from sales_dashboard.auth import login_verifier, settings_verifier
from sales_dashboard.config import (
    ALL_SALESPEOPLE,
    STORE_FILE,
    TEAM_NAME,
    WINDOW_LABELS,
    WINDOW_MONTH,
)
from sales_dashboard.dashboard import (
    format_brl,
    get_dashboard_view,
    get_ticker_messages,
    podium_card_html,
    ticker_html,
)
from sales_dashboard.errors import DashboardError, SpreadsheetImportError
from sales_dashboard.loaders import load_daily_records
from sales_dashboard.store import (
    SnapshotStore,
    add_salesperson,
    clear_all_data,
    find_salesperson,
    has_any_data,
    import_daily_records,
    refresh_sales_data,
    remove_salesperson,
    update_salesperson,
)
from sales_dashboard.summary import request_performance_summary

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title=f"Painel de Performance {TEAM_NAME}",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

store = SnapshotStore(STORE_FILE)

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
for key, default in (
    ("logged_in", False),
    ("settings_unlocked", False),
    ("salespeople", None),
    ("summaries", {}),
):
    if key not in st.session_state:
        st.session_state[key] = default


def commit(change, *args, **kwargs):
    """Apply one store mutation and refresh the in-memory snapshot."""
    st.session_state.salespeople = store.mutate(change, *args, **kwargs)


# ===========================================================================
# LOGIN
# ===========================================================================
if not st.session_state.logged_in:
    st.title(f"Painel de Performance {TEAM_NAME}")
    with st.form("login"):
        username = st.text_input("Usuário")
        password = st.text_input("Senha", type="password")
        submitted = st.form_submit_button("Entrar")

    if submitted:
        if login_verifier().verify(password, username=username):
            st.session_state.logged_in = True
            st.rerun()
        else:
            st.error("Usuário ou senha inválidos.")
    st.stop()


if st.session_state.salespeople is None:
    st.session_state.salespeople = store.load()

salespeople = st.session_state.salespeople

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title(TEAM_NAME)
st.sidebar.markdown("Painel de Performance de Vendas")
st.sidebar.divider()

page = st.sidebar.radio("Navegar", ["Dashboard", "Configurações"])

if st.sidebar.button("Atualizar dados"):
    try:
        st.session_state.salespeople = refresh_sales_data(store)
        salespeople = st.session_state.salespeople
        st.sidebar.success("Dados atualizados com sucesso!")
    except (OSError, ValueError):
        logger.exception("Refresh failed")
        st.sidebar.error("Falha ao atualizar os dados.")

if st.sidebar.button("Sair"):
    st.session_state.logged_in = False
    st.session_state.settings_unlocked = False
    st.session_state.salespeople = None
    st.rerun()

st.sidebar.divider()
st.sidebar.caption(f"Dados: {STORE_FILE.name}")

# ---------------------------------------------------------------------------
# Ticker
# ---------------------------------------------------------------------------
st.markdown(ticker_html(get_ticker_messages(salespeople)), unsafe_allow_html=True)


def podium_card(entry: dict):
    st.markdown(podium_card_html(entry), unsafe_allow_html=True)


# ===========================================================================
# PAGE: Dashboard
# ===========================================================================
if page == "Dashboard":
    if not salespeople:
        st.title("Nenhuma Vendedora Encontrada")
        st.caption("Adicione vendedoras para começar.")
        st.stop()

    col_window, col_person = st.columns(2)
    with col_window:
        window = st.radio(
            "Período",
            list(WINDOW_LABELS),
            index=list(WINDOW_LABELS).index(WINDOW_MONTH),
            format_func=WINDOW_LABELS.get,
            horizontal=True,
        )
    with col_person:
        options = [ALL_SALESPEOPLE] + [sp.id for sp in salespeople]
        names = {ALL_SALESPEOPLE: "Todas"} | {sp.id: sp.name for sp in salespeople}
        selected_id = st.selectbox("Vendedora", options, format_func=names.get)

    view = get_dashboard_view(salespeople, selected_id, window)

    # Podium: 2nd, 1st, 3rd
    st.header("Ranking de Performance")
    podium = {entry["rank"]: entry for entry in view["podium"]}
    cols = st.columns(3)
    for col, rank in zip(cols, (2, 1, 3)):
        if rank in podium:
            with col:
                podium_card(podium[rank])

    st.divider()

    # Metric cards
    st.header("Métricas")
    m = view["metrics"]
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Novos Leads", f"{m['total_leads']:,}".replace(",", "."))
    with c2:
        st.metric("Leads Qualificados (SQL)", f"{m['total_qualified_leads']:,}".replace(",", "."))
    with c3:
        st.metric("Contratos Fechados", f"{m['total_contracts_closed']:,}".replace(",", "."))
    with c4:
        st.metric("Pagamentos (Total)", format_brl(m["total_paid"]))

    # Trend chart
    chart = view["chart"]
    st.subheader(f"Evolução Diária - {view['selected_name']}")
    if chart.empty:
        st.info("Sem dados para exibir.")
    else:
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=chart["label"], y=chart["new_leads"],
            name="Novos Leads", mode="lines+markers",
            line=dict(color="#3498db", width=2),
        ))
        fig.add_trace(go.Scatter(
            x=chart["label"], y=chart["qualified_leads"],
            name="Leads Qualificados", mode="lines+markers",
            line=dict(color="#2ecc71", width=2),
        ))
        fig.add_trace(go.Scatter(
            x=chart["label"], y=chart["paid"],
            name="Pagamentos", mode="lines+markers",
            line=dict(color="#f39c12", width=2),
            yaxis="y2",
        ))
        fig.update_layout(
            height=350,
            yaxis=dict(title="Leads"),
            yaxis2=dict(title="R$", overlaying="y", side="right"),
            plot_bgcolor="rgba(0,0,0,0)",
            margin=dict(l=10, r=10, t=10, b=40),
        )
        st.plotly_chart(fig, use_container_width=True)

    # AI summary for a single salesperson
    if view["selected"] is not None:
        sp, sp_metrics = view["selected"]
        st.subheader("Análise de Performance por IA")
        summary_key = f"{sp.id}:{window}"
        if st.button("Gerar análise"):
            with st.spinner("Gerando análise..."):
                st.session_state.summaries[summary_key] = request_performance_summary(sp.name, sp_metrics)
        if summary_key in st.session_state.summaries:
            st.markdown(st.session_state.summaries[summary_key])


# ===========================================================================
# PAGE: Settings
# ===========================================================================
elif page == "Configurações":
    if not st.session_state.settings_unlocked:
        st.title("Acesso Restrito")
        with st.form("settings_unlock"):
            attempt = st.text_input("Senha", type="password")
            unlock = st.form_submit_button("Entrar")
        if unlock:
            if settings_verifier().verify(attempt):
                st.session_state.settings_unlocked = True
                st.rerun()
            else:
                st.error("Senha incorreta.")
        st.stop()

    st.title("Configurações")

    # --- Salespeople ---
    st.header("Vendedoras")
    st.caption("Adicione, edite ou remova vendedoras do painel.")

    if not salespeople:
        st.info("Nenhuma vendedora cadastrada.")

    for sp in salespeople:
        with st.expander(sp.name):
            with st.form(f"edit_{sp.id}"):
                name = st.text_input("Nome", value=sp.name)
                photo_url = st.text_input("URL da foto", value=sp.photo_url)
                sheet_id = st.text_input("ID da planilha Google", value=sp.google_sheet_id)
                save = st.form_submit_button("Salvar")
            if save:
                try:
                    commit(update_salesperson, sp.id, name, photo_url, sheet_id)
                    st.success("Vendedora atualizada com sucesso!")
                    st.rerun()
                except DashboardError as e:
                    st.error(str(e))

            confirm_delete = st.checkbox(
                "Confirmo a exclusão (esta ação não pode ser desfeita)", key=f"confirm_{sp.id}"
            )
            if st.button("Excluir", key=f"delete_{sp.id}", disabled=not confirm_delete):
                commit(remove_salesperson, sp.id)
                st.success("Vendedora excluída com sucesso.")
                st.rerun()

    with st.form("add_salesperson", clear_on_submit=True):
        st.subheader("Adicionar Vendedora")
        new_name = st.text_input("Nome")
        new_photo_url = st.text_input("URL da foto (opcional)")
        new_photo_file = st.file_uploader("Ou envie uma foto", type=["png", "jpg", "jpeg"])
        new_sheet_id = st.text_input("ID da planilha Google (opcional)")
        add = st.form_submit_button("Adicionar")
    if add:
        photo = new_photo_url
        if new_photo_file is not None:
            encoded = base64.b64encode(new_photo_file.getvalue()).decode("ascii")
            photo = f"data:{new_photo_file.type};base64,{encoded}"
        try:
            commit(add_salesperson, new_name, photo, new_sheet_id)
            st.success("Vendedora adicionada com sucesso!")
            st.rerun()
        except DashboardError as e:
            st.error(str(e))

    st.divider()

    # --- Manual import ---
    st.header("Importar Dados (Manual)")
    st.caption("Faça o upload do arquivo .xlsx para atualizar os dados de uma vendedora.")

    upload = st.file_uploader("1. Envie a Planilha (.xlsx)", type=["xlsx"])
    target_id = st.selectbox(
        "2. Selecione a Vendedora",
        [sp.id for sp in salespeople],
        format_func=lambda sp_id: find_salesperson(salespeople, sp_id).name,
        disabled=not salespeople,
    )
    if st.button("Importar Dados", disabled=upload is None or not target_id):
        with st.spinner("Processando..."):
            try:
                records = load_daily_records(upload.getvalue())
            except SpreadsheetImportError as e:
                st.error(str(e))
            else:
                commit(import_daily_records, target_id, records)
                target_name = find_salesperson(st.session_state.salespeople, target_id).name
                st.success(f"Dados para {target_name} atualizados com sucesso!")

    st.divider()

    # --- Data management ---
    st.header("Gerenciamento de Dados")
    st.warning(
        "Zerar Todos os Dados: esta ação limpará permanentemente todas as métricas "
        "de todas as vendedoras. Use com cuidado."
    )
    confirm_clear = st.checkbox("Tenho certeza que desejo zerar todos os dados")
    if st.button("Zerar Dados", type="primary"):
        if not has_any_data(salespeople):
            st.info("Não existem dados para excluir.")
        elif not confirm_clear:
            st.error("Confirme a operação antes de zerar os dados.")
        else:
            commit(clear_all_data)
            st.success("Todos os dados foram zerados com sucesso.")
            st.rerun()
