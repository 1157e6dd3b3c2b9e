import streamlit as st
import os
import sys

# Ensure src is in path
sys.path.append(os.path.abspath("src"))

from src.ui.manager import UIManager
from src.ui.sidebar import render_sidebar
from src.ui.cleaner_view import render_cleaner_view

# --- Page Config ---
st.set_page_config(
    page_title="Hidden File Analyzer",
    page_icon="🧹",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- Init ---
UIManager.initialize_session_state()

# --- Main Layout ---
def main():
    client = render_sidebar()
    render_cleaner_view(client)

if __name__ == "__main__":
    main()
