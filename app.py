"""Development entrypoint delegating to the application package."""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from offerboard.main import create_app

app = create_app()


if __name__ == "__main__":
    # The stores assume one request at a time.
    app.run(host="0.0.0.0", port=5050, debug=True, threaded=False)
