
def test_ui_imports():
    from src.ui.cleaner_view import render_cleaner_view
    from src.ui.sidebar import render_sidebar, format_size
    from src.ui.manager import UIManager

    assert callable(render_cleaner_view)
    assert callable(render_sidebar)
    assert hasattr(UIManager, "initialize_session_state")
    print("UI Imports Successful")

def test_format_size():
    from src.ui.sidebar import format_size

    assert format_size(0) == "0 Bytes"
    assert format_size(512) == "512 Bytes"
    assert format_size(2048) == "2.00 KB"
    assert format_size(5 * 1024 * 1024) == "5.00 MB"
