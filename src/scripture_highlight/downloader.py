"""Download and prepare the KJV verse text used for highlight labels."""

import os
import shutil
import tempfile
import zipfile
from pathlib import Path

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# The archive host has an outdated certificate
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

BIBLE_ARCHIVE_URL = "https://ldsguy.tripod.com/Iron-rod/kjv-lds.zip"

ASSETS_ENV_VAR = "SCRIPTURE_HIGHLIGHT_ASSETS"

# Files shipped in the archive that are not verse text
UNWANTED_FILES = ["00.index1", "00.index2", "00.Readme"]


def default_assets_dir() -> Path:
    """
    Resolve the assets directory.

    Uses $SCRIPTURE_HIGHLIGHT_ASSETS if set, otherwise ~/.scripture-highlight/assets.
    """
    configured = os.getenv(ASSETS_ENV_VAR)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".scripture-highlight" / "assets"


def assets_present(assets_dir: Path) -> bool:
    return (assets_dir / "Contents.txt").exists() and (assets_dir / "bible").is_dir()


def create_session_with_retries() -> requests.Session:
    """
    Create a requests session that retries transient failures.

    Returns:
        Session retrying GET/HEAD on 429 and 5xx with exponential backoff
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=5,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "HEAD"],
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({"User-Agent": "scripture-highlight/0.1 (+requests)"})
    return session


def download_file(url: str, dest_path: Path, session: requests.Session | None = None) -> None:
    """
    Stream a URL to a local file.

    Raises:
        requests.RequestException: If the download fails
    """
    print(f"Downloading {url}...")

    if session is None:
        session = create_session_with_retries()

    try:
        response = session.get(url, timeout=60, stream=True, verify=False)
        response.raise_for_status()

        with open(dest_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
    except requests.exceptions.RequestException as e:
        print(f"  Download failed: {e}")
        raise

    print(f"  Downloaded to {dest_path}")


def extract_zip(zip_path: Path, extract_to: Path) -> Path:
    """
    Extract an archive that contains a single top-level directory.

    Returns:
        Path to the extracted directory

    Raises:
        zipfile.BadZipFile: If the zip file is corrupt
        ValueError: If the archive does not hold exactly one directory
    """
    print(f"Unpacking {zip_path.name}...")
    with zipfile.ZipFile(zip_path, "r") as zip_ref:
        zip_ref.extractall(extract_to)

    extracted_dirs = [d for d in extract_to.iterdir() if d.is_dir()]
    if len(extracted_dirs) != 1:
        raise ValueError(f"Expected 1 directory in zip, found {len(extracted_dirs)}")

    return extracted_dirs[0]


def prepare_bible_directory(source_dir: Path, assets_dir: Path) -> Path:
    """
    Move extracted book files into ``assets_dir/bible`` as .txt files.

    The archive's 00.Contents table becomes ``assets_dir/Contents.txt``;
    index and readme files are dropped.

    Returns:
        Path to the bible directory
    """
    contents_file = source_dir / "00.Contents"
    if contents_file.exists():
        shutil.move(str(contents_file), str(assets_dir / "Contents.txt"))
        print(f"  Wrote book table to {assets_dir / 'Contents.txt'}")

    for filename in UNWANTED_FILES:
        (source_dir / filename).unlink(missing_ok=True)

    target_dir = assets_dir / "bible"
    if target_dir.exists():
        shutil.rmtree(target_dir)
    shutil.move(str(source_dir), str(target_dir))

    for file_path in target_dir.iterdir():
        if file_path.is_file() and file_path.suffix != ".txt":
            file_path.rename(Path(str(file_path) + ".txt"))

    print(f"  Moved verse files to {target_dir}")
    return target_dir


def ensure_assets_downloaded(assets_dir: str | Path | None = None) -> Path:
    """
    Make sure the verse text assets exist, downloading them if needed.

    Args:
        assets_dir: Target directory. Defaults to default_assets_dir()

    Returns:
        Path to the assets directory

    Raises:
        requests.RequestException: If download fails
        zipfile.BadZipFile: If the archive is corrupt
        ValueError: If the archive layout is unexpected
    """
    assets_dir = Path(assets_dir) if assets_dir is not None else default_assets_dir()

    if assets_present(assets_dir):
        print(f"Verse text already present at {assets_dir}, skipping download")
        return assets_dir

    created_dir = not assets_dir.exists()
    preexisting = {name for name in ("Contents.txt", "bible") if (assets_dir / name).exists()}
    assets_dir.mkdir(parents=True, exist_ok=True)
    print(f"Downloading verse text to {assets_dir}...")

    try:
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            zip_path = temp_path / "bible.zip"
            download_file(BIBLE_ARCHIVE_URL, zip_path)

            extract_path = temp_path / "bible"
            extract_path.mkdir()
            extracted_dir = extract_zip(zip_path, extract_path)
            prepare_bible_directory(extracted_dir, assets_dir)
    except Exception as e:
        print(f"Error preparing assets: {e}")
        _remove_partial_assets(assets_dir, created_dir, preexisting)
        raise

    print("Verse text downloaded and prepared successfully!")
    return assets_dir


def _remove_partial_assets(assets_dir: Path, created_dir: bool, preexisting: set[str]) -> None:
    """Undo a failed download, leaving anything that was already in assets_dir."""
    if created_dir:
        shutil.rmtree(assets_dir, ignore_errors=True)
        return

    if "Contents.txt" not in preexisting:
        (assets_dir / "Contents.txt").unlink(missing_ok=True)
    if "bible" not in preexisting:
        shutil.rmtree(assets_dir / "bible", ignore_errors=True)
