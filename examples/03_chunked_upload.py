"""
Chunked upload - large files with resume after network errors
"""
from pathlib import Path

from dropboxpy import AuthSession, DropboxClient, FileByteSource, TransportError


def main():
    session = AuthSession.deserialize(Path("session.yaml").read_text())
    client = DropboxClient(session)

    def on_progress(progress):
        print(f"Progress: {progress.percentage:.1f}% ({progress.resyncs} resyncs)")

    with FileByteSource.open("large_file.iso") as source:
        uploader = client.get_chunked_uploader(source, progress_callback=on_progress)

        # upload() keeps its state when it raises; calling it again resumes
        for attempt in range(5):
            try:
                uploader.upload(chunk_size=4 * 1024 * 1024)
                break
            except TransportError as e:
                print(f"Network error at {uploader.offset} bytes: {e}")
        else:
            raise SystemExit("Giving up")

        meta = uploader.finish("/backups/large_file.iso", overwrite=True)
        print(f"Uploaded: {meta['path']} ({meta['size']})")


if __name__ == "__main__":
    main()
