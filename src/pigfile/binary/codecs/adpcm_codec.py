from __future__ import annotations

# Step index delta per 4-bit code
INDEX_ADJUST = (
    -1, -1, -1, -1, 2, 4, 6, 8,
    -1, -1, -1, -1, 2, 4, 6, 8,
)

STEP_SIZES = (
    7, 8, 9, 10, 11, 12, 13, 14,
    16, 17, 19, 21, 23, 25, 28,
    31, 34, 37, 41, 45, 50, 55,
    60, 66, 73, 80, 88, 97, 107,
    118, 130, 143, 157, 173, 190, 209,
    230, 253, 279, 307, 337, 371, 408,
    449, 494, 544, 598, 658, 724, 796,
    876, 963, 1060, 1166, 1282, 1411, 1552,
    1707, 1878,
    2066, 2272, 2499, 2749, 3024, 3327, 3660, 4026,
    4428, 4871, 5358, 5894, 6484, 7132, 7845, 8630,
    9493, 10442, 11487, 12635, 13899, 15289, 16818,
    18500, 20350, 22385, 24623, 27086, 29794, 32767,
)

MAX_STEP_INDEX = len(STEP_SIZES) - 1


def is_compressed(length: int, data_length: int) -> bool:
    """Stored bytes shorter than the sample count means 4-bit ADPCM."""
    return data_length < length


def decode_adpcm(compressed: bytes | memoryview, num_samples: int) -> bytes:
    """
    Decode 4-bit step-adaptive ADPCM into 8-bit unsigned PCM.

    Two samples per source byte, low nibble first. State starts fresh on
    every call (index 0, step 7, predictor 0). Samples past the end of
    ``compressed`` are decoded from zero codes.
    """
    src = bytes(compressed)
    out = bytearray(num_samples)

    index = 0
    step = STEP_SIZES[0]
    predicted = 0
    byte = 0

    for i in range(num_samples):
        if i & 1 == 0:
            pos = i >> 1
            byte = src[pos] if pos < len(src) else 0
            code = byte & 0x0F
        else:
            code = byte >> 4

        diff = step >> 3
        if code & 4: diff += step
        if code & 2: diff += step >> 1
        if code & 1: diff += step >> 2
        if code & 8: diff = -diff

        predicted += diff
        if predicted > 32767: predicted = 32767
        elif predicted < -32768: predicted = -32768

        out[i] = ((predicted >> 8) & 0xFF) ^ 0x80

        index += INDEX_ADJUST[code]
        if index < 0: index = 0
        elif index > MAX_STEP_INDEX: index = MAX_STEP_INDEX
        step = STEP_SIZES[index]

    return bytes(out)
