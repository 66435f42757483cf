import argparse
import os
import platform
import sys

from ghbin.download_release import FetchError, download_and_prepare
from ghbin.find_release import RepositoryListError, SearchOptions, find_release_candidates
from ghbin.github_api import create_session

# Fallback token. Leave empty and use -token or GH_TOKEN instead.
STATIC_TOKEN = ""

SUPPORTED_OS = "linux"
SUPPORTED_ARCHES = ("amd64", "arm64")
ARCH_ALIASES = {
    'x86_64': "amd64",
    'amd64': "amd64",
    'aarch64': "arm64",
    'arm64': "arm64",
}


def get_token(token_flag):
    if token_flag:
        return token_flag
    token = os.environ.get("GH_TOKEN")
    if token:
        return token
    return STATIC_TOKEN or ""


def detect_platform():
    system = platform.system().lower()
    machine = platform.machine().lower()
    return system, ARCH_ALIASES.get(machine, machine)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ghbin",
        description="Download the release binary for this platform from your GitHub repositories.",
    )
    parser.add_argument("pattern", nargs="?", default="", help="repository name substring")
    parser.add_argument("version", nargs="?", default=None, help="release tag substring")
    parser.add_argument("-token", "--token", default="", help="GitHub personal access token")
    parser.add_argument("-public", "--public", action="store_true",
                        help="search your public repositories instead of private ones")
    parser.add_argument("-insecure", "--insecure", action="store_true",
                        help="skip TLS certificate verification")
    return parser


def main(argv=None):
    args = build_parser().parse_intermixed_args(argv)

    token = get_token(args.token)
    if not token:
        print("[X] GitHub token not found. Provide one via -token flag or GH_TOKEN env var.",
              file=sys.stderr)
        return 1

    platform_os, platform_arch = detect_platform()
    if platform_os != SUPPORTED_OS or platform_arch not in SUPPORTED_ARCHES:
        print(f"[X] This program runs only on linux/amd64 or linux/arm64. "
              f"Detected: {platform_os}/{platform_arch}", file=sys.stderr)
        return 1

    options = SearchOptions(
        target_os=platform_os,
        target_arch=platform_arch,
        pattern=args.pattern.lower(),
        version=args.version.lower() if args.version else None,
        visibility="public" if args.public else "private",
    )
    with create_session(token, insecure=args.insecure) as session:
        return run(session, options)


def run(session, options):
    try:
        candidates = find_release_candidates(session, options)
    except RepositoryListError as e:
        print(f"[X] Error finding releases: {e}", file=sys.stderr)
        return 1

    if not candidates:
        print("[!] No matching release artifacts found for your platform.", file=sys.stderr)
        return 0

    if len(candidates) > 1:
        for c in candidates:
            print(c)
        return 0

    c = candidates[0]
    print(f"[+] Found one matching artifact: {c.asset_name} in repo "
          f"{c.repo_owner}/{c.repo_name}. Downloading...", file=sys.stderr)
    try:
        download_and_prepare(session, c)
    except FetchError as e:
        print(f"[X] Failed to download and prepare artifact: {e}", file=sys.stderr)
        return 1
    print(f"[✓] Success! Artifact '{c.asset_name}' is downloaded and executable.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
