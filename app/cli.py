"""
Command line batch run: generate every catalog style for one local photo.

Signs in to a running Persona Morph API, dispatches the catalog through a
``GenerationSession`` and writes each successful result next to the others in
an output directory. With ``--save`` every success is also added to the
user's gallery; with auto-save enabled on the account that happens anyway.
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from app.exceptions import PersonaMorphError
from app.schemas import StyleDescriptor
from app.services.generation.api_client import PersonaMorphAPIClient
from app.services.generation.auto_save import AutoSaveCoordinator
from app.services.generation.catalog import STYLES, get_style
from app.services.generation.gemini_image_client import GeminiImageClient
from app.services.generation.image_generator import parse_data_url, to_data_url
from app.services.generation.scheduler import GenerationSession
from app.services.generation.task_state import TaskStatus, Tasks
from app.utils.logger import setup_logger

logger = setup_logger("cli")


def load_image_as_data_url(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"{path} does not look like an image file")
    return to_data_url(path.read_bytes(), mime_type)


def write_results(tasks: Tasks, output_dir: Path) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for task in tasks:
        if task.status != TaskStatus.SUCCESS:
            continue
        mime_type, data = parse_data_url(task.result)
        extension = mimetypes.guess_extension(mime_type) or ".png"
        target = output_dir / f"{task.style_id}{extension}"
        target.write_bytes(data)
        written.append(target)
    return written


def select_styles(style_ids: list[str] | None) -> tuple[StyleDescriptor, ...]:
    """Catalog styles to run, in catalog order unless ids are given."""
    if not style_ids:
        return STYLES
    try:
        return tuple(get_style(style_id) for style_id in style_ids)
    except KeyError as e:
        raise ValueError(f"Unknown style id {e}") from e


async def print_progress(tasks: Tasks) -> None:
    done = sum(task.is_terminal for task in tasks)
    print(f"\r{done}/{len(tasks)} styles finished", end="", flush=True)


async def run_batch(args: argparse.Namespace) -> int:
    source_image = load_image_as_data_url(args.image)
    styles = select_styles(args.styles)

    async with PersonaMorphAPIClient(
        base_url=args.server, require_https=not args.allow_http
    ) as api_client:
        coordinator = AutoSaveCoordinator(api_client)
        if args.register:
            await coordinator.sign_up(args.username, args.password)
        else:
            await coordinator.sign_in(args.username, args.password)
        logger.info(
            f"Signed in as '{coordinator.user.username}', auto-save: {coordinator.auto_save_enabled}"
        )

        session = GenerationSession(
            GeminiImageClient(),
            coordinator,
            styles=styles,
            concurrency=args.concurrency,
            listeners=[print_progress],
        )
        await session.accept_source_image(source_image)
        tasks = await session.run()
        print()

        if args.save:
            for task in tasks:
                await session.save_task(task.style_id)

        for path in write_results(session.tasks, args.output):
            print(f"  wrote {path}")
        for task in session.tasks:
            if task.status == TaskStatus.ERROR:
                print(f"  {task.style_id}: {task.error}")

        summary = session.summary()
        print(
            f"{summary['success']} succeeded, {summary['error']} failed, "
            f"{len(coordinator.saved_images)} images in gallery"
        )
        return 0 if summary["success"] else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate every catalog style for a reference photo"
    )
    parser.add_argument("image", type=Path, help="Reference photo")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument(
        "--register", action="store_true", help="Create the account before running"
    )
    parser.add_argument(
        "--server", default="https://localhost:3000", help="Persona Morph API base URL"
    )
    parser.add_argument(
        "--allow-http",
        action="store_true",
        help="Allow a plain http server; it must run with SESSION_COOKIE_SECURE=false",
    )
    parser.add_argument(
        "--styles",
        nargs="+",
        metavar="STYLE_ID",
        help="Only generate these catalog styles",
    )
    parser.add_argument(
        "--output", type=Path, default=Path("generated"), help="Directory for results"
    )
    parser.add_argument(
        "--save", action="store_true", help="Save every success to the gallery"
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Styles generated at once (defaults to GENERATION_CONCURRENCY)",
    )
    args = parser.parse_args(argv)

    try:
        return asyncio.run(run_batch(args))
    except (PersonaMorphError, ValueError) as e:
        logger.error(f"Batch run failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
