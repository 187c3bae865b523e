import os

TENANT_ID = os.getenv("TENANT_ID")

POLICY_SNAPSHOT_PATH = os.getenv("POLICY_SNAPSHOT_PATH")

DEBUG = False
JSON_SORT_KEYS = False
