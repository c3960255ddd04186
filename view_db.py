#!/usr/bin/env python3
"""
Simple script to view the contents of the karaoke store (database or files)
"""
from karaoke.storage import create_storage
from karaoke.utils.config import load_config


def view_database(storage):
    storage.init()

    print("=" * 60)
    print(f"KARAOKE STORE CONTENTS ({storage.name})")
    print("=" * 60)

    # Catalog
    print("\n🎵 SONGS:")
    print("-" * 40)
    songs = storage.load_catalog()
    if songs:
        for song in songs:
            star = " ★" if song["favorite"] else ""
            print(f"[{song['id']}] {song['title']} - {song['artist']}{star}")
            if song["category"]:
                print(f"  Category: {song['category']}")
            if song["key"]:
                print(f"  Key offset: {song['key']}s")
    else:
        print("Catalog is empty")

    # Requests
    print("\n📝 REQUESTS:")
    print("-" * 40)
    requests = storage.load_requests()
    if requests:
        for req in requests[-10:]:
            print(f"[{req['timestamp']}] {req['song']}")
        print(f"\n(Showing last {min(len(requests), 10)} of {len(requests)} requests)")
    else:
        print("No requests")

    # Session state
    print("\n🎤 NOW SINGING:")
    print("-" * 40)
    session = storage.load_session()
    current = session["currentSong"]
    if current:
        print(f"{current['song']['title']} - {current['song']['artist']} ({current['requestedBy']})")
    else:
        print("Nobody")

    print("\n📀 QUEUE:")
    print("-" * 40)
    if session["queue"]:
        for position, entry in enumerate(session["queue"], start=1):
            print(f"{position}. {entry['song']['title']} - {entry['requestedBy']} (entry {entry['id']})")
    else:
        print("Queue is empty")

    if storage.supports_qr:
        print(f"\nQR code visible: {storage.load_qr_visible()}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    view_database(create_storage(load_config()))
