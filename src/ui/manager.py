import streamlit as st
from .api_client import ApiClient

class UIManager:
    """Wrapper to handle Streamlit Caching and State."""

    @staticmethod
    @st.cache_resource
    def get_api_client(base_url: str) -> ApiClient:
        """Cached client per server URL."""
        return ApiClient(base_url)

    @staticmethod
    def initialize_session_state():
        if "target_dir" not in st.session_state:
            st.session_state.target_dir = ""
        if "scan_response" not in st.session_state:
            st.session_state.scan_response = None
        if "deleted" not in st.session_state:
            st.session_state.deleted = []
        if "clean_zip" not in st.session_state:
            st.session_state.clean_zip = None
        if "flash" not in st.session_state:
            st.session_state.flash = None

    @staticmethod
    def reset_results(scan_response=None):
        """Server tree changed: drop derived state, including the prepared zip."""
        st.session_state.scan_response = scan_response
        st.session_state.clean_zip = None

    @staticmethod
    def flash(message: str):
        """Queue a success message for the next run (st.rerun discards this one's output)."""
        st.session_state.flash = message

    @staticmethod
    def show_flash(container=st):
        message = st.session_state.get("flash")
        if message:
            container.success(message)
            st.session_state.flash = None
