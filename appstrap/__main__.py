"""Allow ``python -m appstrap``."""
from appstrap.cli import app

app()
