import sys
import json
import argparse
import logging
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
from src.github_store import RepoConfig, RepoFileClient
from src.manifest import ManifestService

load_dotenv()


def main():
    parser = argparse.ArgumentParser(description="Print the slide manifest stored in the repository")
    parser.add_argument("--json", action="store_true", help="Print the normalized items as JSON")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    config = RepoConfig.from_env()
    service = ManifestService(RepoFileClient(config), config.manifest_path, config.branch)
    items = service.fetch()

    if args.json:
        print(json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False))
        return
    print(f"{config.owner}/{config.repo}@{config.branch}:{config.manifest_path}")
    print(f"Found {len(items)} slides")
    for i, item in enumerate(items, start=1):
        extra = item.model_extra or {}
        suffix = f"  |  {', '.join(sorted(extra))}" if extra else ""
        print(f"{i:02d}. {item.src}{suffix}")


if __name__ == "__main__":
    main()
