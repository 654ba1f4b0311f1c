import os

# Settings require a token; tests never reach the real API.
os.environ.setdefault("TMDB_READ_API_KEY", "test-token")
os.environ.setdefault("OMDB_API_KEYS", '["key-a", "key-b", "key-c"]')
