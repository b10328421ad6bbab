"""Development entry point for running the statistics service."""

import os

from dotenv import load_dotenv

from optistats.app import create_app

load_dotenv()

app = create_app()

if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("OPTISTATS_PORT", "5000")))
