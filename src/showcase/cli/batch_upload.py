"""Batch upload of a local image directory into the showcase gallery.

Usage:
    invoke --search-root src/showcase/cli -c batch_upload batch-upload --directory ./art --username alice
"""

import os
from pathlib import Path

import structlog
from dotenv import load_dotenv
from invoke import Context, task

from showcase.error_handling import ShowcaseError
from showcase.logging_config import configure_structured_logging
from showcase.services.store import Store, create_store

logger = structlog.get_logger()

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def find_image_files(directory: str, recursive: bool = False) -> list[Path]:
    """
    List supported image files under ``directory``, sorted by path.

    Args:
        directory: Directory to scan
        recursive: Also scan subdirectories

    Returns:
        list[Path]: Image file paths
    """
    root = Path(directory)
    candidates = root.rglob("*") if recursive else root.iterdir()
    return sorted(path for path in candidates if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS)


def title_for(path: Path) -> str:
    """Derive a display title from a file name: ``blue_hour-2.png`` -> ``Blue Hour 2``."""
    return path.stem.replace("_", " ").replace("-", " ").strip().title() or path.name


def upload_files(store: Store, username: str, files: list[Path]) -> tuple[int, int]:
    """
    Upload each file for ``username``.

    Returns:
        tuple[int, int]: (successful, failed) counts
    """
    successful = 0
    failed = 0

    for path in files:
        try:
            image = store.upload_image(username, path.read_bytes(), title_for(path))
            logger.info("batch_upload_file_succeeded", filename=path.name, image_id=image.id)
            successful += 1
        except (ShowcaseError, OSError) as e:
            logger.error("batch_upload_file_failed", filename=path.name, error=str(e))
            failed += 1

    return successful, failed


@task
def batch_upload(
    c: Context,
    directory: str,
    username: str,
    env_file: str = ".env",
    recursive: bool = False,
    dry_run: bool = False,
):
    """
    Upload images from a local directory for an existing user.

    Args:
        c (Context): Invoke context.
        directory (str): Path to the directory containing images.
        username (str): Owner of the uploaded images; must already be registered.
        env_file (str): Path to the environment file. Default is '.env'.
        recursive (bool): Search for images in subdirectories. Default is False.
        dry_run (bool): If True, lists files to be processed without uploading. Default is False.
    """
    if os.path.exists(env_file):
        load_dotenv(dotenv_path=env_file)
    configure_structured_logging()

    if not os.path.isdir(directory):
        logger.error("batch_upload_directory_not_found", directory=directory)
        return

    image_files = find_image_files(directory, recursive=recursive)
    if not image_files:
        logger.warning("batch_upload_no_images", directory=directory)
        return

    logger.info("batch_upload_started", directory=directory, username=username, files=len(image_files))

    if dry_run:
        print("\n--- Dry Run Mode: Files to be processed ---")
        for path in image_files:
            print(f"- {path} -> '{title_for(path)}'")
        print("--- End of Dry Run ---")
        return

    store = create_store()
    try:
        if store.get_user(username) is None:
            logger.error("batch_upload_unknown_user", username=username)
            return

        successful, failed = upload_files(store, username, image_files)
    finally:
        store.close()

    logger.info("batch_upload_finished", successful=successful, failed=failed, total=len(image_files))
    print(f"\nBatch upload complete. Successful: {successful}, Failed: {failed}")
