import os

# Must run before any app module is imported: settings are read at import time.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.pop("OPENAI_API_KEY", None)
