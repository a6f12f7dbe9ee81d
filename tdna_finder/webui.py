from __future__ import annotations

import json
from pathlib import Path

import streamlit as st

from tdna_finder.config import DATA_DIR
from tdna_finder.engine import EngineHandle, get_visualization_bundle
from tdna_finder.modules.table_reader import load_data_dir
from tdna_finder.utils.exceptions import GeneNotFound, InvalidInput, TDNAError


st.set_page_config(page_title="T-DNA Finder", page_icon="🧬", layout="wide")

st.title("T-DNA Finder")
st.caption("Confirmed homozygous T-DNA insertions inside a gene's coding sequence")


@st.cache_resource(show_spinner="Loading T-DNA datasets...")
def _load_handle(data_dir: str) -> EngineHandle:
    return load_data_dir(Path(data_dir))


with st.form("tdna_form"):
    col1, col2 = st.columns(2)
    with col1:
        gene_id = st.text_input("Gene ID", placeholder="e.g. AT1G25320")
    with col2:
        data_dir = st.text_input("Data directory", value=str(DATA_DIR))
    submitted = st.form_submit_button("Find T-DNA lines", use_container_width=True)


if not submitted:
    st.info("Enter an Arabidopsis gene ID and press **Find T-DNA lines**.")
    st.stop()


if not gene_id.strip():
    st.error("Please enter a gene ID.")
    st.stop()

try:
    handle = _load_handle(data_dir)
except TDNAError as exc:
    st.error(f"Could not load datasets: {exc}")
    st.stop()

try:
    bundle = get_visualization_bundle(handle, gene_id)
except GeneNotFound:
    st.error(f"{gene_id.strip().upper()} was not found in the annotation.")
    st.stop()
except InvalidInput as exc:
    st.error(str(exc))
    st.stop()

left, right = st.columns(2)
with left:
    st.subheader("Gene")
    st.json(bundle.gene.model_dump())
    st.write(f"Eligible lines: `{len(bundle.metadata.get('eligible_lines', []))}`")
    st.write(f"Insertions in CDS: `{len(bundle.insertions)}`")
    if not bundle.has_coding_sequence:
        st.warning("This gene has no CDS features in the annotation.")

with right:
    st.subheader("Features")
    st.dataframe([feature.model_dump() for feature in bundle.features], use_container_width=True)

st.subheader("T-DNA insertions")
if bundle.insertions:
    st.dataframe([match.model_dump() for match in bundle.insertions], use_container_width=True)
else:
    st.info("No confirmed homozygous T-DNA lines sent to the stock center were found in this gene's CDS.")

if bundle.warnings:
    with st.expander("Warnings"):
        for warning in bundle.warnings:
            st.write(f"- {warning}")

st.download_button(
    label="Download bundle JSON",
    data=json.dumps(bundle.model_dump(mode="json"), indent=2),
    file_name=f"{bundle.gene.id}.tdna.json",
    mime="application/json",
    use_container_width=True,
)
