import os

# No default tenant: evaluation always runs for an explicit tenant.
TENANT_ID = os.getenv("TENANT_ID")

POLICY_SNAPSHOT_PATH = os.getenv("POLICY_SNAPSHOT_PATH", "examples/policy_snapshot.yaml")

DEBUG = True
JSON_SORT_KEYS = True
