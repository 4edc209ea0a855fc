"""
Streamlit UI -- Tabular Insights Copilot.

Features:
  - CSV / JSON upload with a preview of the active dataset
  - Free-text questions answered by the heuristic interpreter
  - Bar / line chart rendered from the returned chart description
  - Narrative, pseudo-SQL and operation panels
  - Result download as CSV
"""
import httpx
import pandas as pd
import streamlit as st

from src.core.config import get_settings

API_BASE = get_settings().api_base_url
_TIMEOUT = 30

st.set_page_config(
    page_title="Tabular Insights Copilot",
    page_icon="bar_chart",
    layout="wide",
    initial_sidebar_state="expanded",
)


if "messages" not in st.session_state:
    st.session_state.messages = []

if "dataset" not in st.session_state:
    st.session_state.dataset = None


def _load_dataset():
    """Fetch the active dataset from the API; cache in session_state."""
    try:
        st.session_state.dataset = httpx.get(f"{API_BASE}/api/fetch-data", timeout=5).json()
    except httpx.HTTPError:
        st.session_state.dataset = None


def _upload(file) -> str | None:
    """Send the file to the API; return an error message on failure."""
    try:
        resp = httpx.post(
            f"{API_BASE}/api/upload",
            files={"file": (file.name, file.getvalue())},
            timeout=_TIMEOUT,
        )
    except httpx.HTTPError as exc:
        return f"API not reachable: {exc}"
    if resp.status_code != 200:
        return resp.json().get("detail", "Upload failed")
    _load_dataset()
    return None


with st.sidebar:
    st.title("Dataset")

    uploaded = st.file_uploader("Upload CSV or JSON", type=["csv", "json"])
    if uploaded is not None and st.button("Load file", use_container_width=True):
        error = _upload(uploaded)
        if error:
            st.error(error)
        else:
            st.success(f"Loaded {uploaded.name}")

    if st.session_state.dataset is None:
        _load_dataset()

    dataset = st.session_state.dataset
    if dataset and dataset.get("rowCount"):
        st.write(f"Rows: **{dataset['rowCount']}**")
        st.write(f"Columns: **{len(dataset['columns'])}**")
        st.caption(", ".join(dataset["columns"]))
    elif dataset is None:
        st.info("API not reachable -- start the FastAPI server first.\n\n```\nuvicorn src.api.main:app --reload\n```")
    else:
        st.info("No data loaded yet.")


st.title("Tabular Insights Copilot")
st.markdown("Ask a question about your data. The answer comes with a chart, a short narrative and the equivalent SQL.")

if dataset and dataset.get("rowCount"):
    with st.expander("Data preview", expanded=False):
        st.dataframe(pd.DataFrame(dataset["data"], columns=dataset["columns"]).head(50), use_container_width=True)


with st.expander("Example questions", expanded=False):
    examples = [
        "top 5 clientes",
        "qual a evolução mensal",
        "faturamento por categoria",
        "média de valor por produto",
        "evolução anual dos pedidos",
        "quantos registros do cliente acme",
    ]
    cols = st.columns(2)
    for i, ex in enumerate(examples):
        if cols[i % 2].button(ex, key=f"ex_{i}", use_container_width=True):
            st.session_state.prefill = ex


def _render_chart(chart: dict, table: dict):
    rows = table.get("rows", [])
    if not rows:
        st.caption("No rows to chart.")
        return
    df = pd.DataFrame(rows).set_index(chart["xKey"])
    if chart.get("type") == "line":
        st.line_chart(df[chart["yKey"]])
    else:
        st.bar_chart(df[chart["yKey"]])
    st.caption(chart.get("explanation", ""))


def _render_answer(payload: dict):
    st.markdown(f"_{payload['interpretation']}_")
    _render_chart(payload["chart"], payload["table"])

    analysis = payload["analysis"]
    st.markdown(f"**{analysis['summary']}**")
    for insight in analysis.get("insights", []):
        st.markdown(f"- {insight}")

    with st.expander("Table", expanded=False):
        df = pd.DataFrame(payload["table"]["rows"], columns=payload["table"]["columns"])
        st.dataframe(df, use_container_width=True)
        st.download_button("Download CSV", df.to_csv(index=False), "resultado.csv", "text/csv")

    with st.expander("SQL", expanded=False):
        st.code(payload["sql"], language="sql")

    with st.expander("Operation", expanded=False):
        st.json(payload["operation"])

    with st.expander("Recommendations", expanded=False):
        for rec in analysis.get("recommendations", []):
            st.markdown(f"- {rec}")


for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        if msg["role"] == "user":
            st.markdown(msg["content"])
        elif "error" in msg:
            st.error(msg["error"])
        else:
            _render_answer(msg["payload"])


question = st.chat_input("Ask about your data…")
if not question and st.session_state.get("prefill"):
    question = st.session_state.pop("prefill")

if question:
    st.session_state.messages.append({"role": "user", "content": question})
    with st.chat_message("user"):
        st.markdown(question)

    with st.chat_message("assistant"):
        try:
            resp = httpx.post(f"{API_BASE}/api/ai/analyze", json={"question": question}, timeout=_TIMEOUT)
            if resp.status_code == 200:
                payload = resp.json()
                _render_answer(payload)
                st.session_state.messages.append({"role": "assistant", "payload": payload})
            else:
                detail = resp.json().get("detail", "Failed to analyze question")
                st.error(detail)
                st.session_state.messages.append({"role": "assistant", "error": detail})
        except httpx.HTTPError as exc:
            st.error(f"API not reachable: {exc}")
            st.session_state.messages.append({"role": "assistant", "error": str(exc)})
