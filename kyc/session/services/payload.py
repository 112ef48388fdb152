"""
Frames reçues en JSON (sorties des moteurs côté client) -> objets Frame.
"""
from typing import List, Mapping, Sequence

from kyc.core.frames import Frame, TextCandidate, BarcodeCandidate, SYMBOLOGY_PDF417
from kyc.quality.services.pixels import decode_pixel_buffer


def frame_from_dict(index: int, data: Mapping) -> Frame:
    pixels = None
    px = data.get("pixels")
    if px:
        pixels = decode_pixel_buffer(
            pixels_base64=px.get("pixels_base64", ""),
            width=px.get("width", 0),
            height=px.get("height", 0),
            bytes_per_row=px.get("bytes_per_row"),
            bytes_per_pixel=px.get("bytes_per_pixel", 4),
        )
    return Frame(
        index=index,
        pixels=pixels,
        text_candidates=tuple(
            TextCandidate(text=c.get("text", ""), confidence=float(c.get("confidence", 1.0)))
            for c in data.get("text_candidates") or []
        ),
        barcode_candidates=tuple(
            BarcodeCandidate(
                payload=c.get("payload", ""),
                symbology=c.get("symbology", SYMBOLOGY_PDF417),
                confidence=float(c.get("confidence", 1.0)),
            )
            for c in data.get("barcode_candidates") or []
        ),
    )


def frames_from_payload(frames: Sequence[Mapping]) -> List[Frame]:
    return [frame_from_dict(i, f) for i, f in enumerate(frames)]
