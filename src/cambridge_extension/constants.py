"""Release and binary constants."""

BINARY_NAME = "cambridge-lsp"
LANGUAGE_SERVER_ID = "cambridge-lsp"

# GitHub release URL structure
GITHUB_BASE = "https://github.com"
RELEASE_OWNER = "andrinoff"
RELEASE_REPO = "cambridge-lang"
RELEASES_PATH = "releases"
DOWNLOAD_PATH = "download"

# Bump together with the published release assets
RELEASE_VERSION = "v0.1.0"

RELEASES_BASE = f"{GITHUB_BASE}/{RELEASE_OWNER}/{RELEASE_REPO}/{RELEASES_PATH}/{DOWNLOAD_PATH}"
RELEASE_URL_TEMPLATE = "{base}/{version}/{asset}"

RELEASE_ASSETS = {
    "macos-arm64": "cambridge-lsp-macos-arm64",
    "macos-intel": "cambridge-lsp-macos-intel",
    "linux": "cambridge-lsp-linux",
    "windows": "cambridge-lsp.exe",
}
