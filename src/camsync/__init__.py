"""camsync - Mirror media from a Wi-Fi camera to local storage."""
