"""
File operations - upload, download, list, move
"""
from pathlib import Path

from dropboxpy import AuthSession, DropboxClient, NotModified


def main():
    session = AuthSession.deserialize(Path("session.yaml").read_text())
    client = DropboxClient(session)

    # Small files go in a single request
    meta = client.put_file("/notes/today.txt", b"buy milk")
    print(f"Uploaded: {meta['path']} ({meta['size']})")

    # Download with metadata
    contents, meta = client.get_file_and_metadata("/notes/today.txt")
    print(f"Downloaded {len(contents)} bytes, rev {meta['rev']}")

    # List a folder
    folder = client.metadata("/notes")
    for entry in folder["contents"]:
        print(f"  {entry['path']}")

    # Poll for changes using the folder hash
    try:
        client.metadata("/notes", hash=folder["hash"])
    except NotModified:
        print("No changes")

    # Copy, move, delete
    client.file_copy("/notes/today.txt", "/notes/backup.txt")
    client.file_move("/notes/backup.txt", "/archive/backup.txt")
    client.file_delete("/archive/backup.txt")

    # Share links
    print(client.shares("/notes/today.txt")["url"])


if __name__ == "__main__":
    main()
