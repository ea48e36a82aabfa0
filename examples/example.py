import time

from chipcore import Machine, SCREEN_WIDTH
from chipcore.logging import TraceLogger

# Draws the glyphs 0..3 side by side, then spins on a jump to itself
ROM = bytes([
    0x60, 0x00,  # LD V0, 0x00      x
    0x61, 0x00,  # LD V1, 0x00      y
    0xA0, 0x50,  # LD I, 0x050      glyph 0
    0xD0, 0x15,  # DRW V0, V1, 5
    0x70, 0x05,  # ADD V0, 0x05
    0xA0, 0x55,  # LD I, 0x055      glyph 1
    0xD0, 0x15,
    0x70, 0x05,
    0xA0, 0x5A,  # LD I, 0x05A      glyph 2
    0xD0, 0x15,
    0x70, 0x05,
    0xA0, 0x5F,  # LD I, 0x05F      glyph 3
    0xD0, 0x15,
    0x12, 0x18,  # JP 0x218, lands on 0x21A (this jump) after the advance
])

if __name__ == "__main__":
    machine = Machine(logger=TraceLogger(log_level="INFO"))
    machine.load_rom(ROM)

    start = time.time()
    machine.run(200, progress=True)
    print("Execution time (s):", time.time() - start)

    for row in machine.framebuffer[:6]:
        print("".join("#" if pixel == 1 else "." for pixel in row[:SCREEN_WIDTH // 2]))

    machine.dump_state()
