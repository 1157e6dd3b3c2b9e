import streamlit as st
import os
import requests
from .manager import UIManager
from .api_client import ApiError
from ..config import Config

def format_size(num_bytes: int) -> str:
    size = float(num_bytes or 0)
    for unit in ("Bytes", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "Bytes" else f"{size:.2f} {unit}"
        size /= 1024

def render_sidebar():
    st.sidebar.title("Hidden File Analyzer")
    st.sidebar.markdown("---")

    # 1. Folder + Server
    st.sidebar.header("📁 Control Panel")
    target_dir = st.sidebar.text_input(
        "Folder to analyze",
        value=st.session_state.target_dir or os.path.abspath("."),
        help="Every file in this folder is uploaded and checked for hidden/junk files."
    )
    st.session_state.target_dir = target_dir

    api_url = st.sidebar.text_input("API URL", value=Config.API_URL)
    client = UIManager.get_api_client(api_url)

    if not client.health():
        st.sidebar.error("❌ Server not reachable")
        return client

    # 2. Status Board
    try:
        stats = client.stats()
    except (ApiError, requests.RequestException) as e:
        st.sidebar.warning(f"Stats unavailable: {e}")
        stats = {}

    st.sidebar.metric("Files on server", stats.get("totalFiles", 0))
    c1, c2 = st.sidebar.columns(2)
    c1.metric("Clean", stats.get("cleanFiles", 0), help=format_size(stats.get("cleanSize", 0)))
    c2.metric("Hidden", stats.get("hiddenFiles", 0), help=format_size(stats.get("hiddenSize", 0)))

    # 3. Reset
    st.sidebar.markdown("---")
    if st.sidebar.button("🧹 Clear Uploads", help="Remove everything uploaded to the server"):
        try:
            res = client.clear()
            UIManager.reset_results()
            st.session_state.deleted = []
            UIManager.flash(res["message"])
            st.rerun()
        except (ApiError, requests.RequestException) as e:
            st.sidebar.error(f"Error: {e}")

    return client
