import streamlit as st
import os
import requests
from .api_client import ApiClient, ApiError
from .manager import UIManager
from .sidebar import format_size
from ..config import Config

def render_cleaner_view(client: ApiClient):
    st.header("🧹 Hidden File Cleaner")
    st.info("Upload a folder, find dotfiles, OS metadata, temp/backup files and cache folders, "
            "then delete them or download only the clean files.")

    UIManager.show_flash()
    target_dir = st.session_state.target_dir

    if st.button("🔍 Scan Folder", type="primary"):
        if not os.path.isdir(target_dir):
            st.error("❌ Directory not found!")
        else:
            with st.spinner("Uploading and scanning..."):
                try:
                    UIManager.reset_results(client.scan_folder(target_dir))
                    st.session_state.deleted = []
                except (ApiError, requests.RequestException) as e:
                    st.error(f"Scan error: {e}")

    response = st.session_state.scan_response
    if not response:
        return

    # Summary
    summary = response["summary"]
    c1, c2, c3 = st.columns(3)
    c1.metric("Total", summary["total"])
    c2.metric("Clean", summary["clean"])
    c3.metric("Hidden", summary["hidden"])

    # Results (server classification is authoritative)
    rows = [
        {
            "Path": path,
            "Status": "Hidden" if entry["hidden"] else "Clean",
            "Size": format_size(entry["size"]),
            "Modified": entry["lastModified"],
        }
        for path, entry in sorted(response["results"].items())
    ]
    show_hidden_only = st.toggle("Show hidden files only", value=False)
    if show_hidden_only:
        rows = [r for r in rows if r["Status"] == "Hidden"]
    st.dataframe(rows, use_container_width=True, hide_index=True)

    st.divider()
    c_del, c_dl = st.columns(2)

    # Delete
    with c_del:
        if summary["hidden"] > 0:
            st.warning(f"Found {summary['hidden']} hidden file(s) that can be deleted.")
            confirm = st.checkbox("I understand this cannot be undone")
            if st.button("🗑️ Delete Hidden Files", disabled=not confirm):
                try:
                    res = client.delete_hidden()
                    st.session_state.deleted = res["deleted"]
                    # Refresh from what is left on the server
                    UIManager.reset_results(client.rescan())
                    UIManager.flash(res["message"])
                    st.rerun()
                except (ApiError, requests.RequestException) as e:
                    st.error(f"Delete error: {e}")
        else:
            st.success("No hidden files found!")

        if st.session_state.deleted:
            with st.expander(f"Deleted ({len(st.session_state.deleted)})"):
                for item in st.session_state.deleted:
                    st.write(f"`{item}`")

    # Download (fetched on request, dropped whenever the server tree changes)
    with c_dl:
        if summary["clean"] > 0:
            if st.button("📦 Prepare Download"):
                try:
                    with st.spinner("Building zip..."):
                        st.session_state.clean_zip = client.download_clean()
                except (ApiError, requests.RequestException) as e:
                    st.error(f"Download error: {e}")

            if st.session_state.clean_zip is not None:
                st.download_button(
                    "⬇️ Download Clean Files",
                    data=st.session_state.clean_zip,
                    file_name=Config.ZIP_FILENAME,
                    mime="application/zip",
                )
