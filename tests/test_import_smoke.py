import sys
import pytest
from unittest.mock import patch

@pytest.mark.parametrize("store_status", ["true", "false"])
@pytest.mark.parametrize("redaction", ["true", "false"])
def test_import_graph_smoke(store_status, redaction):
    """
    Verify that the app can be imported without crashing,
    regardless of feature flags.
    """
    with patch.dict("os.environ", {
        "STORE_FORM_STATUS": store_status,
        "ENABLE_PII_REDACTION": redaction,
        "REDIS_URL": "redis://localhost:6379/0",  # harmless default
    }):
        if "authgate.main" in sys.modules:
            del sys.modules["authgate.main"]
        try:
            import authgate.main
            import authgate.core.form
            import authgate.client.auth_client
        except ImportError as e:
            pytest.fail(f"Import failed with flags store_status={store_status} redaction={redaction}: {e}")

def test_uvicorn_importable():
    """
    Simulate uvicorn import string loading.
    """
    from authgate.main import app
    assert app is not None
