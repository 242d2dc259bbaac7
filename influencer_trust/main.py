"""Main script for running the Influencer Trust API server."""

import os

import uvicorn


def main():
    """Run the API server."""
    uvicorn.run(
        "influencer_trust.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )


if __name__ == "__main__":
    main()
