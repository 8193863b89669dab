"""Run the terminal client: python -m quicknotes.client"""

from quicknotes.client.terminal import app

if __name__ == "__main__":
    app()
