from streamlit.testing.v1 import AppTest


def _flash_app():
    import streamlit as st
    from src.ui.manager import UIManager

    UIManager.initialize_session_state()
    UIManager.show_flash()
    if st.button("Clear"):
        UIManager.flash("Upload directory cleared.")
        st.rerun()


def _cleaner_app():
    import streamlit as st
    from unittest.mock import MagicMock
    from src.ui.manager import UIManager
    from src.ui.cleaner_view import render_cleaner_view

    UIManager.initialize_session_state()
    if "client" not in st.session_state:
        client = MagicMock()
        client.download_clean.return_value = b"PK\x05\x06" + b"\x00" * 18
        st.session_state.client = client
        st.session_state.scan_response = {
            "success": True,
            "summary": {"total": 1, "hidden": 0, "clean": 1},
            "results": {"proj/readme.txt": {
                "relativePath": "proj/readme.txt", "hidden": False, "size": 5,
                "lastModified": "2024-01-01T00:00:00+00:00", "extension": ".txt",
            }},
        }
    render_cleaner_view(st.session_state.client)


def test_flash_message_survives_rerun():
    at = AppTest.from_function(_flash_app)
    at.run()
    assert len(at.success) == 0

    at.button[0].click().run()
    assert [s.value for s in at.success] == ["Upload directory cleared."]

    # Shown once only
    at.run()
    assert len(at.success) == 0


def test_download_only_fetched_on_request():
    at = AppTest.from_function(_cleaner_app)
    at.run()
    client = at.session_state["client"]
    assert client.download_clean.call_count == 0

    # Unrelated widget interaction does not download
    at.toggle[0].set_value(True).run()
    assert client.download_clean.call_count == 0

    prepare = [b for b in at.button if "Prepare" in b.label][0]
    prepare.click().run()
    assert client.download_clean.call_count == 1
    assert at.session_state["clean_zip"] is not None

    # Cached across reruns
    at.toggle[0].set_value(False).run()
    assert client.download_clean.call_count == 1
