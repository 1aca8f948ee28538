"""Filter-chain helpers — drawtext labels, padding, trial watermark."""

from .models import CHAIN_LENGTH

# Neutral saturation; used to pad short chains.
PAD_FILTER = "hue=s=1"

LABEL_X = 16
LABEL_Y = 16
LABEL_FONT_SIZE = 24
LABEL_COLOR = "white"


def drawtext(label: str) -> str:
    """Top-left text label in ffmpeg drawtext syntax."""
    return (
        f"drawtext=text='{label}':x={LABEL_X}:y={LABEL_Y}"
        f":fontsize={LABEL_FONT_SIZE}:fontcolor={LABEL_COLOR}"
    )


WATERMARK_FILTER = drawtext("TRIAL")


def normalize(candidate, licensed: bool) -> tuple[tuple[str, ...], bool]:
    """Force the chain to exactly three directives and apply the watermark.

    Short chains are padded with PAD_FILTER, long ones truncated. When
    unlicensed, slot 2 is always replaced by the TRIAL label, whatever it
    held before.

    Returns:
        (chain, watermarked)
    """
    chain = list(candidate)[:CHAIN_LENGTH]
    while len(chain) < CHAIN_LENGTH:
        chain.append(PAD_FILTER)

    watermarked = not licensed
    if watermarked:
        chain[CHAIN_LENGTH - 1] = WATERMARK_FILTER
    return tuple(chain), watermarked


def filter_graph(chain) -> str:
    """Compose directives into one sequential filter graph."""
    return ",".join(chain)
