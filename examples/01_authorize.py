"""
Authorization - OAuth handshake and session persistence
"""
import os
from pathlib import Path

from dropboxpy import AuthSession, DropboxClient

SESSION_FILE = Path("session.yaml")


def main():
    # Next runs: restore the saved session, no browser needed
    if SESSION_FILE.exists():
        session = AuthSession.deserialize(SESSION_FILE.read_text())
    else:
        session = AuthSession(os.environ["DROPBOX_APP_KEY"], os.environ["DROPBOX_APP_SECRET"])

        # First run: the user approves the app in a browser
        print("Allow access here:")
        print(session.build_authorize_url())
        input("Press Enter when done...")

        session.exchange_for_access_token()
        SESSION_FILE.write_text(session.serialize())

    client = DropboxClient(session)
    info = client.account_info()
    print(f"Logged in as {info['display_name']}")

    # Logout: forget the access token, keep the app credentials
    session.clear_access_token()


if __name__ == "__main__":
    main()
