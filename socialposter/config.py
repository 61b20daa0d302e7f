import os

API_KEY = os.environ.get("SOCIALPOSTER_API_KEY") or os.environ.get("HF_TOKEN", "")
PROVIDER = os.environ.get("SOCIALPOSTER_PROVIDER", "huggingface")
MODEL = os.environ.get("SOCIALPOSTER_MODEL", "")
LLM_TIMEOUT = float(os.environ.get("SOCIALPOSTER_LLM_TIMEOUT", "20"))

# Optional JSON file replacing the built-in hashtag / CTA / hook tables
CATALOG_PATH = os.environ.get("SOCIALPOSTER_CATALOG_PATH", "")
