import os

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("ANTHROPIC_API_KEY", "")
