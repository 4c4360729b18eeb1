"""Walk through the outfit wizard in a terminal against a running gateway."""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

from stylist.api.schemas import OutfitResult
from stylist.config.settings import get_settings
from stylist.monitoring.logging import configure_logging
from stylist.wizard import GatewayClient, WizardController, WizardPhase
from stylist.wizard.catalog import OCCASIONS, STYLES, find_occasion

logger = logging.getLogger(__name__)


async def _ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip()


def _image_as_data_uri(path: Path) -> str:
    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


async def _collect(controller: WizardController) -> None:
    machine = controller.machine
    while not controller.state.form.occasion:
        for occasion in OCCASIONS:
            print(f"  {occasion.emoji} {occasion.label} ({occasion.id}) - {occasion.tagline}")
        choice = find_occasion(await _ask("What's the occasion? "))
        if choice is None:
            await controller.next()
            print(controller.state.error)
            continue
        machine.select_occasion(choice.label)
    await controller.next()

    print("Styles: " + ", ".join(STYLES))
    machine.update(style=await _ask("Style/vibe (optional): "))
    await controller.next()

    machine.update(
        fabric=await _ask("Fabric & texture (optional): "),
        color=await _ask("Color palette (optional): "),
    )
    await controller.next()

    machine.update(
        location=await _ask("Location & weather (optional): "),
        body_type=await _ask("Body type (optional): "),
    )
    await controller.next()

    raw_path = await _ask("Reference image path (optional): ")
    if raw_path:
        path = Path(raw_path).expanduser()
        if path.exists():
            machine.update(image=_image_as_data_uri(path))
        else:
            print(f"{path} not found; continuing without a reference image.")


def _print_result(result: OutfitResult) -> None:
    print(f"\n== {result.outfit_name} ==\n{result.description}\n")
    for item in result.items:
        print(f"- {item.name} ({item.price_range}): {item.description} [search: {item.search_query}]")
    if result.styling_tips:
        print("\nStyling tips:")
        for tip in result.styling_tips:
            print(f"  * {tip}")
    if result.color_palette:
        print("\nPalette: " + " ".join(result.color_palette))


async def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    controller = WizardController(GatewayClient(settings.gateway_url))
    try:
        await _collect(controller)
        while True:
            await controller.next()
            if controller.state.phase is WizardPhase.RESULT:
                break
            print(controller.state.error)
            if (await _ask("Retry? [Y/n] ")).lower() == "n":
                return

        assert controller.state.result is not None
        _print_result(controller.state.result)
        print("\nGenerating preview image...")
        await controller.wait_for_images()
        image_url = controller.state.generated_image
        if image_url:
            output = Path("outfit_preview.png")
            output.write_bytes(base64.b64decode(image_url.split(",", 1)[1]))
            print(f"Preview saved to {output.resolve()}")
        else:
            print("Preview image unavailable.")
    finally:
        await controller.close()


if __name__ == "__main__":
    asyncio.run(main())
