# streamlit_app.py
"""
Table Explorer UI

Run the API first (python run.py), then: streamlit run streamlit_app.py
"""

import pandas as pd
import streamlit as st

from table_explorer.core.prompts import EXAMPLE_QUESTIONS
from table_explorer.ui.api_client import ExplorerApiClient, ExplorerApiError
from table_explorer.ui.explorer import (
    PAGE_SIZE_OPTIONS,
    LoadStatus,
    TableView,
    filter_table_names,
    format_value,
    page_count,
)

st.set_page_config(page_title="Table Explorer", layout="wide")


# -------------------------
# Session state
# -------------------------
def get_client() -> ExplorerApiClient:
    if "client" not in st.session_state:
        st.session_state.client = ExplorerApiClient()
    return st.session_state.client


def get_view() -> TableView:
    if "view" not in st.session_state:
        st.session_state.view = TableView()
    return st.session_state.view


def load_tables(client: ExplorerApiClient):
    try:
        st.session_state.tables = client.list_tables()
        st.session_state.tables_error = None
    except ExplorerApiError as e:
        st.session_state.tables = []
        st.session_state.tables_error = str(e)


def load_table(view: TableView, client: ExplorerApiClient, table_name: str):
    token = view.select_table(table_name)
    st.session_state.prompt_response = ""
    with st.spinner("Loading data..."):
        try:
            rows = client.get_table_rows(table_name)
        except ExplorerApiError as e:
            view.fail_load(token, f"Error fetching data: {e}")
            return
    view.complete_load(token, rows)


def rows_to_df(view: TableView) -> pd.DataFrame:
    return pd.DataFrame(
        [[format_value(row.get(col)) for col in view.columns] for row in view.visible_rows],
        columns=view.columns,
    )


# -------------------------
# Sidebar: table list
# -------------------------
client = get_client()
view = get_view()

if "tables" not in st.session_state:
    load_tables(client)

with st.sidebar:
    st.header("Available Tables")
    if st.button("Refresh"):
        load_tables(client)
    table_search = st.text_input("Search tables")

    if st.session_state.tables_error:
        st.error(st.session_state.tables_error)
    else:
        filtered_tables = filter_table_names(st.session_state.tables, table_search)
        if not filtered_tables:
            st.caption("No tables found")
        for name in filtered_tables:
            label = f"**{name}**" if name == view.table_name else name
            if st.button(label, key=f"table_{name}", use_container_width=True):
                load_table(view, client, name)


# -------------------------
# Main area
# -------------------------
if view.status == LoadStatus.IDLE:
    st.info("Select a table from the list to view its data")
    st.stop()

st.title(f"{view.table_name} Data Explorer")

if view.status == LoadStatus.ERROR:
    st.error(view.error)
    st.stop()

if view.is_empty:
    st.info(view.empty_message())
    st.stop()

# Prompt section
with st.container(border=True):
    st.subheader("Ask AI About Your Data")
    st.caption(f"Ask any question about the data in {view.table_name}. Try these examples:")
    prompt_key = f"prompt_{view.generation}"
    example_cols = st.columns(len(EXAMPLE_QUESTIONS))
    for col, question in zip(example_cols, EXAMPLE_QUESTIONS):
        if col.button(question, key=f"example_{view.generation}_{question}"):
            st.session_state[prompt_key] = question

    prompt = st.text_area("Type your question here...", key=prompt_key, height=100)
    if st.button("Ask AI", disabled=not (prompt or "").strip()):
        with st.spinner("Thinking..."):
            try:
                st.session_state.prompt_response = client.ask(view.table_name, prompt)
            except ExplorerApiError as e:
                st.session_state.prompt_response = f"Failed to get response: {e}"
    if st.session_state.get("prompt_response"):
        st.markdown(st.session_state.prompt_response)

# Search & filters
gen = view.generation
st.text_input(
    "Search all columns",
    key=f"search_{gen}",
    on_change=lambda: view.set_search(st.session_state[f"search_{gen}"]),
)

with st.expander("Filters"):
    for index, column_filter in enumerate(list(view.filters)):
        c1, c2, c3 = st.columns([2, 3, 1])
        c1.selectbox(
            "Column",
            view.columns,
            index=view.columns.index(column_filter.column),
            key=f"filter_col_{gen}_{index}",
            on_change=lambda i=index: view.update_filter(i, column=st.session_state[f"filter_col_{gen}_{i}"]),
        )
        c2.text_input(
            "Filter value",
            value=column_filter.value,
            key=f"filter_val_{gen}_{index}",
            on_change=lambda i=index: view.update_filter(i, value=st.session_state[f"filter_val_{gen}_{i}"]),
        )
        if c3.button("Remove", key=f"filter_rm_{gen}_{index}"):
            view.remove_filter(index)
            st.rerun()
    if st.button("Add Filter"):
        view.add_filter()
        st.rerun()

# Table + pagination
filtered_total = len(view.filtered_rows)
st.dataframe(rows_to_df(view), use_container_width=True, hide_index=True, height=440)

p1, p2, p3 = st.columns([1, 1, 2])
p1.selectbox(
    "Rows per page",
    PAGE_SIZE_OPTIONS,
    index=PAGE_SIZE_OPTIONS.index(view.page_size),
    key=f"page_size_{gen}",
    on_change=lambda: view.set_page_size(st.session_state[f"page_size_{gen}"]),
)
pages = max(page_count(filtered_total, view.page_size), 1)
if p2.button("◀ Prev", disabled=view.page == 0):
    view.set_page(view.page - 1)
    st.rerun()
if p2.button("Next ▶", disabled=view.page >= pages - 1):
    view.set_page(view.page + 1)
    st.rerun()
start = view.page * view.page_size
end = min(start + view.page_size, filtered_total)
p3.caption(f"{start + 1 if filtered_total else 0}–{end} of {filtered_total} (page {view.page + 1} of {pages})")
