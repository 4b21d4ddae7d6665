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
from src.manifest import ManifestService, ManifestValidationError

load_dotenv()


def main():
    parser = argparse.ArgumentParser(description="Replace the slide manifest with items from a local JSON file")
    parser.add_argument("items_file", help="JSON file holding an items array")
    parser.add_argument("--delete-files", action="store_true", help="Also delete slide files dropped from the list")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    items = json.loads(Path(args.items_file).read_text(encoding="utf-8"))
    if isinstance(items, dict) and "items" in items:
        items = items["items"]

    config = RepoConfig.from_env()
    service = ManifestService(RepoFileClient(config), config.manifest_path, config.branch)
    try:
        result = service.replace(items, delete_files=args.delete_files)
    except ManifestValidationError as e:
        print("Invalid items:", e)
        raise SystemExit(2)

    print(json.dumps(result.to_response(), indent=2))


if __name__ == "__main__":
    main()
