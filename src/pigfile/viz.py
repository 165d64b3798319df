from __future__ import annotations
from .binary.formats import SOUND_SAMPLE_RATE
from .models.file import PigFile


def show_bitmap(pig: PigFile, index: int):
    """Raw palette indices as a grayscale image, for sanity-checking the decoders."""
    import matplotlib.pyplot as plt
    bm = pig.bitmap(index)
    pixels = pig.get_bitmap_pixels(index)
    rows = [list(pixels[r * bm.width:(r + 1) * bm.width]) for r in range(bm.height)]
    plt.figure()
    plt.imshow(rows, cmap="gray", vmin=0, vmax=255, interpolation="nearest")
    plt.title(f"{bm.name} ({bm.width}x{bm.height}, flags={bm.flags})")
    plt.show()


def plot_sound(pig: PigFile, index: int):
    import matplotlib.pyplot as plt
    snd = pig.sound(index)
    pcm = pig.get_sound_pcm(index)
    t = [i / SOUND_SAMPLE_RATE for i in range(len(pcm))]
    plt.figure()
    plt.plot(t, [b - 128 for b in pcm], linewidth=0.5)
    plt.xlabel("Time (s)")
    plt.ylabel("Sample")
    plt.title(f"{snd.name} ({snd.length} samples{', ADPCM' if snd.compressed else ''})")
    plt.show()
