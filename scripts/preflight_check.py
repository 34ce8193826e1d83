#!/usr/bin/env python3
import sys
import os

print("Running preflight import check...")
try:
    # Set dummy env vars to avoid surprises during config load
    os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

    import authgate.main
    print("Import authgate.main: OK")

    import authgate.client.auth_client
    print("Import authgate.client.auth_client: OK")

    from authgate.settings import settings
    if not settings.AUTH_SERVICE_URL:
        print("[WARN] AUTH_SERVICE_URL is not set; every login attempt will fail with the generic message.")

    print("Preflight check passed.")
    sys.exit(0)
except Exception as e:
    print(f"Preflight check FAILED: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)
