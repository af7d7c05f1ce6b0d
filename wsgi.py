"""WSGI entry point for the task API."""
import os
import logging

# Only load .env outside managed hosting
if not os.getenv("WEBSITE_SITE_NAME"):
    from dotenv import load_dotenv
    load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

from factory import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
