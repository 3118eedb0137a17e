"""Feature extraction pipeline from a grey level image to a ridge skeleton."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from fpextract.binarizer import binarize
from fpextract.equalizer import Equalizer
from fpextract.hill_orientation import detect_orientation
from fpextract.local_histogram import BlockMap, analyze, smooth_around_corners
from fpextract.oriented_smoother import SmootherConfig, smooth
from fpextract.segmentation import SegmentationMask
from fpextract.thinner import Thinner

BLOCK_SIZE = 16
RIDGE_SMOOTHER = SmootherConfig(radius=7, angular_resolution=32, step_factor=1.59)
ORTHOGONAL_SMOOTHER = SmootherConfig(radius=4, angular_resolution=11, step_factor=1.11)
DEFAULT_IMAGE = "../TestImages/Person1/Bas1440999265-Hamster-0-1.png.pgm"


@dataclass
class Timings:
    """Clock readings, in seconds, taken at the start of each stage."""

    start: float = 0.0
    histogram: float = 0.0
    segmentation: float = 0.0
    equalization: float = 0.0
    orientation: float = 0.0
    binarisation: float = 0.0
    thinning: float = 0.0
    detection: float = 0.0
    filtering: float = 0.0
    end: float = 0.0

    def durations(self) -> dict:
        """Seconds spent in each stage, ending with the total."""
        return {
            "Histogram generation": self.segmentation - self.histogram,
            "Segmentation": self.equalization - self.segmentation,
            "Equalization": self.orientation - self.equalization,
            "Orientation": self.binarisation - self.orientation,
            "Binarisation": self.thinning - self.binarisation,
            "Ridge thinning": self.detection - self.thinning,
            "Minutiae detection": self.filtering - self.detection,
            "Minutiae filtering": self.end - self.filtering,
            "TOTAL": self.end - self.start,
        }


@dataclass
class ExtractionResult:
    """Binarized and thinned images, indexed [x, y], with stage timings."""

    binarized: np.ndarray
    thinned: np.ndarray
    timings: Timings = field(default_factory=Timings)


def invert_image(image) -> np.ndarray:
    """Return the negative of an 8-bit grey level image."""
    pixels = np.asarray(image)
    if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
        raise ValueError("pixel values must lie in 0..255")
    return (255 - pixels.astype(np.int64)).astype(np.uint8)


def extract(image) -> ExtractionResult:
    """Run the extraction pipeline on a grey level image indexed [x, y]."""
    clock = time.perf_counter
    pixels = np.asarray(image)
    if pixels.ndim != 2:
        raise ValueError("image must be two-dimensional")
    timings = Timings(start=clock())
    width, height = pixels.shape
    blocks = BlockMap(width, height, BLOCK_SIZE)

    timings.histogram = clock()
    histogram = analyze(blocks, pixels)
    smoothed_histogram = smooth_around_corners(histogram)

    timings.segmentation = clock()
    mask = SegmentationMask().compute_mask(blocks, histogram)

    timings.equalization = clock()
    equalized = Equalizer().equalize(blocks, pixels, smoothed_histogram, mask)

    timings.orientation = clock()
    orientation = detect_orientation(equalized, mask, blocks)
    smoothed = smooth(RIDGE_SMOOTHER, equalized, orientation, mask, blocks, 128)
    orthogonal = smooth(ORTHOGONAL_SMOOTHER, smoothed, orientation, mask, blocks, 0)

    timings.binarisation = clock()
    binarized = binarize(smoothed, orthogonal, mask, blocks)

    timings.thinning = clock()
    thinned = Thinner().thin(binarized)

    timings.detection = clock()
    timings.filtering = clock()
    timings.end = clock()
    return ExtractionResult(binarized=binarized, thinned=thinned, timings=timings)


def _read_pgm(path) -> np.ndarray:
    data = Path(path).read_bytes()
    fields = []
    pos = 0
    while len(fields) < 4:
        if pos >= len(data):
            raise ValueError("truncated PGM header")
        char = data[pos : pos + 1]
        if char.isspace():
            pos += 1
        elif char == b"#":
            newline = data.find(b"\n", pos)
            pos = len(data) if newline < 0 else newline + 1
        else:
            end = pos
            while end < len(data) and not data[end : end + 1].isspace() and data[end : end + 1] != b"#":
                end += 1
            fields.append(data[pos:end])
            pos = end
    magic, width, height, maxval = fields[0], int(fields[1]), int(fields[2]), int(fields[3])
    if magic not in (b"P5", b"P2"):
        raise ValueError("not a PGM file")
    if width < 1 or height < 1 or not 0 < maxval < 256:
        raise ValueError("unsupported PGM dimensions or depth")
    count = width * height
    if magic == b"P5":
        pixels = np.frombuffer(data, dtype=np.uint8, count=count, offset=pos + 1)
    else:
        values = data[pos:].split()
        if len(values) < count:
            raise ValueError("truncated PGM data")
        pixels = np.array([int(value) for value in values[:count]], dtype=np.uint8)
    return pixels.reshape(height, width).T.copy()


def _write_pgm(path, image) -> None:
    pixels = np.asarray(image)
    if pixels.dtype == bool:
        pixels = pixels.astype(np.uint8) * 255
    width, height = pixels.shape
    header = f"P5\n{width} {height}\n255\n".encode("ascii")
    Path(path).write_bytes(header + np.ascontiguousarray(pixels.T, dtype=np.uint8).tobytes())


def main(argv=None) -> int:
    """Extract each PGM image given and write its binarized and thinned forms."""
    parser = argparse.ArgumentParser(
        prog="fpextract", description="Binarize and thin fingerprint images in PGM format."
    )
    parser.add_argument("files", nargs="*", help="PGM images to process")
    args = parser.parse_args(argv)

    files = args.files
    if not files:
        print(f"No files specified, defaulting to {DEFAULT_IMAGE}\n")
        files = [DEFAULT_IMAGE]

    for index, filename in enumerate(files):
        if index:
            print()
        print(f"Processing {filename}")
        try:
            image = _read_pgm(filename)
        except (OSError, ValueError) as error:
            print(f"cannot read {filename}: {error}", file=sys.stderr)
            continue

        result = extract(image)
        for label, seconds in result.timings.durations().items():
            print(f"{label:>20}: {seconds:f}")

        stem = filename[:-4]
        _write_pgm(stem + ".binarized.pgm", result.binarized)
        _write_pgm(stem + ".thinned.pgm", result.thinned)
    return 0