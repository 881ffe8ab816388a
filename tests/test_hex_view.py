from hxe.core.layout import DATA_TOP, OFFSET_WIDTH
from hxe.ui.hex_view import HexView
from hxe.ui.surface import Event, EventType, Key, Surface

from conftest import FakeDevice, key


class StrictDevice(FakeDevice):
    """Fails like curses does when the cursor is moved off the screen."""

    def show_cursor(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise RuntimeError(f"cursor off screen at ({x}, {y})")
        super().show_cursor(x, y)


def open_view(make_file, make_config, make_surface, data: bytes, width: int = 80,
              height: int = 24, **kwargs) -> HexView:
    surface = make_surface(width, height)
    view = HexView(make_config(make_file(data), **kwargs), surface)
    view.init()
    view.on_focus()
    return view


def test_init_loads_visible_window(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(range(100)), height=4)

    assert view.layout.bytes_per_row == 16
    assert view.layout.capacity == 32
    assert bytes(view.window.buffer) == bytes(range(32))


def test_render_row_groups_bytes(make_file, make_config, make_surface) -> None:
    data = bytes([0xA1, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07])
    view = open_view(make_file, make_config, make_surface, data,
                     group=4, bytes_per_row=8, columns=frozenset({"hex"}))

    assert view.render_row(0, data) == "00000000  A1010203 04050607 "


def test_render_row_decodes_text_column(make_file, make_config, make_surface) -> None:
    data = bytes([0x41, 0x00, 0x7F, 0x20])
    view = open_view(make_file, make_config, make_surface, data, bytes_per_row=4)

    assert view.render_row(0, data) == "00000000  41 00 7F 20  A.. "


def test_render_row_pads_short_rows(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, b"AB", bytes_per_row=4, group=2)

    assert view.render_row(0, b"AB") == "00000000  4142       AB"


def test_render_row_text_only(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, b"\xc1\xc2",
                     columns=frozenset({"text"}), encoding="cp037")

    assert view.render_row(0, b"\xc1\xc2") == "AB"


def test_render_row_offset_radix(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, b"A", offset_base="oct",
                     columns=frozenset({"hex"}), bytes_per_row=1)

    assert view.render_row(8, b"A") == "00000010  41 "


def test_dynamic_region_is_drawn(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, b"Hello, world!\n", height=6)
    device = view.surface.device

    assert device.row(DATA_TOP).startswith("00000000  48 65 6C 6C 6F")
    assert "Hello, world!." in device.row(DATA_TOP)
    assert device.row(DATA_TOP + 1).strip() == ""


def test_static_header(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(100),
                     columns=frozenset({"hex", "text", "keys"}))
    device = view.surface.device

    assert device.row(0).startswith(" hxe ")
    assert "data.bin" in device.row(0)
    assert "[100 bytes]" in device.row(0)
    assert device.row(1).startswith("Offset(h) 00 01 02 03")
    assert device.row(1)[view.layout.text_x():].startswith("Decoded text")
    assert device.row(23).startswith("F10Quit ArrowsMove")
    assert device.style_at(0, 0) == view.surface.style.inverted()
    assert device.style_at(0, 23) == view.surface.style


def test_static_header_redraw_is_idempotent(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(100),
                     columns=frozenset({"hex", "text", "keys"}))
    device = view.surface.device

    view.draw_static()
    first = dict(device.cells)
    view.draw_static()

    assert device.cells == first


def test_ruler_lines_up_with_groups(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(64), group=4, bytes_per_row=16)
    device = view.surface.device

    ruler = device.row(1)
    first_row = device.row(DATA_TOP)
    for column in range(0, 16, 4):
        x = view.layout.byte_x(column)
        assert ruler[x - 1] == " "
        assert first_row[x - 1] == " "
        assert ruler[x:x + 2] == f"{column:02X}"


def test_right_moves_device_cursor(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(100))
    device = view.surface.device

    assert device.cursor == (OFFSET_WIDTH, DATA_TOP)

    view.on_event(key(Key.RIGHT))
    assert device.cursor == (OFFSET_WIDTH + 3, DATA_TOP)

    view.on_event(key(Key.DOWN))
    assert device.cursor == (OFFSET_WIDTH + 3, DATA_TOP + 1)
    assert view.window.cursor_offset == 17


def test_five_page_downs_stop_at_end_of_file(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(range(100)), height=4)
    device = view.surface.device

    for _ in range(5):
        view.on_event(key(Key.PAGE_DOWN))

    assert view.window.window_offset == 96
    assert view.window.cursor_offset == view.window.length == 4
    assert device.row(DATA_TOP).startswith("00000060  60 61 62 63")
    assert device.cursor == (OFFSET_WIDTH + 4 * 3, DATA_TOP)


def test_down_at_end_of_short_file(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(40))
    view.window.cursor_offset = 40

    view.on_event(key(Key.DOWN))

    assert view.window.cursor_offset == 40
    assert view.window.window_offset == 0


def test_page_change_redraws_only_dynamic_region(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(range(100)), height=4)
    device = view.surface.device
    device.cells[(0, 0)] = ("#", None)

    view.on_event(key(Key.PAGE_DOWN))

    assert device.cells[(0, 0)] == ("#", None)
    assert device.row(DATA_TOP).startswith("00000020  20 21")


def test_resize_recomputes_layout_and_buffer(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(range(200)), height=4)
    device = view.surface.device
    view.on_event(key(Key.PAGE_DOWN))
    view.on_event(key(Key.RIGHT))

    device.width, device.height = 80, 10
    view.surface.resize(80, 10)
    view.on_event(Event(EventType.RESIZE, width=80, height=10))

    assert view.layout.capacity == 16 * 8
    assert view.window.length == 16 * 8
    assert view.window.absolute_offset == 33
    assert bytes(view.window.buffer) == bytes(range(view.window.window_offset,
                                                   view.window.window_offset + 128))


def test_unfocus_hides_cursor_and_focus_restores_it(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(100))
    device = view.surface.device
    view.on_event(key(Key.RIGHT))

    view.on_unfocus()
    assert device.cursor is None
    assert not view.focused

    view.on_focus()
    assert device.cursor == (OFFSET_WIDTH + 3, DATA_TOP)
    assert view.focused


def test_close_releases_file(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(10))

    view.on_close()

    assert view.window.file is None


def open_strict_view(make_file, make_config, data: bytes, width: int, height: int,
                     **kwargs) -> HexView:
    surface = Surface(StrictDevice(width, height))
    surface.init()
    view = HexView(make_config(make_file(data), **kwargs), surface)
    view.init()
    view.on_focus()
    return view


def test_cursor_follows_bytes_cut_off_by_narrow_terminal(make_file, make_config) -> None:
    view = open_strict_view(make_file, make_config, bytes(256), 30, 5, group=16)
    device = view.surface.device

    assert view.layout.bytes_per_row == 16
    assert device.cursor == (OFFSET_WIDTH, DATA_TOP)

    for _ in range(10):
        view.on_event(key(Key.RIGHT))
    assert device.cursor == (29, DATA_TOP)

    view.on_event(key(Key.DOWN))
    assert device.cursor == (29, DATA_TOP + 1)

    for _ in range(3):
        view.on_event(key(Key.DOWN))
    assert view.window.absolute_offset == 74
    assert device.cursor == (29, DATA_TOP + 1)


def test_cursor_stays_on_screen_in_tiny_terminal(make_file, make_config) -> None:
    view = open_strict_view(make_file, make_config, bytes(100), 10, 10)
    device = view.surface.device

    assert view.layout.bytes_per_row == 1
    assert device.cursor == (9, DATA_TOP)

    view.on_unfocus()
    view.on_focus()
    assert device.cursor == (9, DATA_TOP)


def test_wide_offsets_widen_the_offset_column(make_file, make_config, make_surface) -> None:
    view = open_view(make_file, make_config, make_surface, bytes(64), group=4)
    device = view.surface.device
    view.window.file_size = 0x1_0000_0001

    view.update_layout()
    view.draw_static()

    assert view.layout.offset_width == 11
    row = view.render_row(0x1_0000_0000, b"ABCD")
    assert row.startswith("100000000  41424344 ")
    assert row[view.layout.byte_x(0):].startswith("41424344")
    assert device.row(1).startswith("Offset(h)  00")
    assert device.row(1)[view.layout.byte_x(4):].startswith("04")
