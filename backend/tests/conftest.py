"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real key/value service or SMTP relay
for _var in (
    "KV_REST_API_URL", "KV_REST_API_TOKEN",
    "SMTP_HOST", "SMTP_USER", "SMTP_PASS",
    "ADMIN_KEY", "TEST_EMAIL_KEY", "REQUESTS_TO", "REQUESTS_FROM",
):
    os.environ.pop(_var, None)
os.environ.setdefault("PUBLIC_DIR", "nonexistent-public-dir")
