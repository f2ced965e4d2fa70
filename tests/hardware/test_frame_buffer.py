"""
retro_chip8.hardware.frame_bufferモジュールの単体テスト。
"""
import pytest

from retro_chip8.hardware.frame_buffer import FrameBuffer, Frame, SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:test_suite XOR描画、衝突判定、画面端の扱い、Frameの不変性を検証します。

@pytest.fixture
def fb():
    return FrameBuffer()

class TestDrawSprite:
    def test_draw_sets_pixels_msb_first(self, fb):
        assert fb.draw_sprite(0, 0, [0b10100000]) == 0
        assert fb.get_pixel(0, 0)
        assert not fb.get_pixel(1, 0)
        assert fb.get_pixel(2, 0)

    # @intent:test_case_collision 同じスプライトを2回描くと衝突フラグ1が返り、元の（消灯）状態に戻ることを検証します。
    def test_draw_twice_collides_and_restores(self, fb):
        sprite = [0xF0, 0x90, 0x90, 0x90, 0xF0]
        assert fb.draw_sprite(10, 5, sprite) == 0
        assert fb.get_frame().lit_count() == 14
        assert fb.draw_sprite(10, 5, sprite) == 1
        assert fb.get_frame().lit_count() == 0

    def test_partial_overlap(self, fb):
        fb.draw_sprite(0, 0, [0x80])
        assert fb.draw_sprite(0, 0, [0xC0]) == 1
        assert not fb.get_pixel(0, 0)
        assert fb.get_pixel(1, 0)

    def test_no_collision_when_lighting_new_pixels(self, fb):
        fb.draw_sprite(0, 0, [0x80])
        assert fb.draw_sprite(0, 0, [0x40]) == 0

    # @intent:test_case_edge 回り込みなしの場合、画面外の画素は破棄されることを検証します。
    def test_no_wrap_clips_right_edge(self, fb):
        fb.draw_sprite(60, 0, [0xFF])
        frame = fb.get_frame()
        assert frame.lit_count() == 4
        assert all(frame.is_set(x, 0) for x in range(60, 64))
        assert not frame.is_set(0, 1)
        assert not frame.is_set(0, 0)

    def test_no_wrap_clips_bottom_edge(self, fb):
        fb.draw_sprite(0, 31, [0x80, 0x80, 0x80])
        assert fb.get_frame().lit_count() == 1

    def test_wrap_policy(self):
        fb = FrameBuffer(wrap=True)
        fb.draw_sprite(60, 31, [0xFF, 0xFF])
        frame = fb.get_frame()
        assert frame.is_set(0, 31)
        assert frame.is_set(3, 0)
        assert not frame.is_set(4, 0)
        assert frame.lit_count() == 16

    def test_too_many_rows(self, fb):
        with pytest.raises(ValueError):
            fb.draw_sprite(0, 0, [0xFF] * 16)

    def test_clear_screen(self, fb):
        fb.draw_sprite(0, 0, [0xFF] * 15)
        fb.clear_screen()
        assert fb.get_frame().lit_count() == 0


class TestFrame:
    def test_frame_dimensions_and_colors(self, fb):
        fb.draw_sprite(0, 0, [0x80])
        frame = fb.get_frame()
        assert isinstance(frame, Frame)
        assert (frame.width, frame.height) == (SCREEN_WIDTH, SCREEN_HEIGHT)
        assert frame.color_at(0, 0) == 0x44
        assert frame.color_at(1, 0) == 0xDD

    # @intent:test_case_immutability 取得したFrameはその後の描画の影響を受けないことを検証します。
    def test_frame_is_a_snapshot(self, fb):
        frame = fb.get_frame()
        fb.draw_sprite(0, 0, [0xFF])
        assert frame.lit_count() == 0
        with pytest.raises(AttributeError):
            frame.width = 10

    def test_rgb_bytes(self):
        fb = FrameBuffer(palette=(0x00, 0xFF))
        fb.draw_sprite(0, 0, [0x80])
        data = fb.get_frame().to_rgb_bytes()
        assert len(data) == SCREEN_WIDTH * SCREEN_HEIGHT * 3
        assert data[0:3] == b"\xff\xff\xff"
        assert data[3:6] == b"\x00\x00\x00"
