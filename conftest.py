"""Global pytest configuration."""

import os

# Tests never talk to real services: force the stub LLM and fixture places
os.environ["OPENAI_API_KEY"] = ""
os.environ["GOOGLE_PLACES_API_KEY"] = ""
