import os

# Tests set TENANT_ID explicitly.
TENANT_ID = os.getenv("TENANT_ID")

POLICY_SNAPSHOT_PATH = os.getenv("POLICY_SNAPSHOT_PATH", "examples/policy_snapshot.yaml")

DEBUG = False
TESTING = True
JSON_SORT_KEYS = True
