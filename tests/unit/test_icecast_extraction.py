from core.icecast_status import IcecastStatusClient, extract_snapshot, parse_status_page
from core.models import ListenerSnapshot
from tests.fakes import FakeHttp, FakeResponse

MOUNT = "Mount Point /stream.mp3"
URL = "https://radio.test/radio/status.xsl"


def _mount_box(heading: str, rows: list[tuple[str, ...]]) -> str:
    trs = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
    return f"""
    <div class="roundbox">
      <div class="mounthead"><h3 class="mount">{heading}</h3></div>
      <div class="mountcont"><table class="yellowkeys"><tbody>{trs}</tbody></table></div>
    </div>
    """


def _page(*boxes: str) -> str:
    return "<html><body>" + "".join(boxes) + "</body></html>"


class TestExtractSnapshot:
    def test_reads_now_playing_and_listeners(self):
        html = _page(_mount_box(MOUNT, [
            ("Stream Name:", "Lidyi"),
            ("Listeners (current):", " 7 "),
            ("Currently playing:", "Artist - Song.mp3"),
        ]))
        snap = extract_snapshot(parse_status_page(html), MOUNT)
        assert snap == ListenerSnapshot(now_playing="Artist - Song.mp3", listener_count=7)

    def test_picks_exact_mount_among_several(self):
        html = _page(
            _mount_box("Mount Point /stream.mp3.backup", [("Currently playing:", "Wrong"), ("Listeners (current):", "99")]),
            _mount_box("Mount Point /stream", [("Currently playing:", "Also wrong")]),
            _mount_box(f"  {MOUNT}\n", [("Currently playing:", "Right"), ("Listeners (current):", "3")]),
        )
        snap = extract_snapshot(parse_status_page(html), MOUNT)
        assert snap.now_playing == "Right"
        assert snap.listener_count == 3

    def test_missing_mount_is_no_update(self, caplog):
        html = _page(_mount_box("Mount Point /other.mp3", [("Currently playing:", "x")]))
        assert extract_snapshot(parse_status_page(html), MOUNT) is None
        assert any(r.levelname == "WARNING" for r in caplog.records)

    def test_mount_outside_info_box_is_no_update(self):
        html = _page(f'<h3 class="mount">{MOUNT}</h3><table><tr><td>Currently playing:</td><td>x</td></tr></table>')
        assert extract_snapshot(parse_status_page(html), MOUNT) is None

    def test_heading_without_mount_class_is_ignored(self):
        html = _page(f'<div class="roundbox"><h3>{MOUNT}</h3></div>')
        assert extract_snapshot(parse_status_page(html), MOUNT) is None

    def test_partial_labels_keep_defaults(self):
        html = _page(_mount_box(MOUNT, [("Currently playing:", "Only title")]))
        assert extract_snapshot(parse_status_page(html), MOUNT) == ListenerSnapshot("Only title", 0)

    def test_rows_without_two_cells_are_skipped(self):
        html = _page(_mount_box(MOUNT, [
            ("Currently playing:", "Song", "extra"),
            ("Listeners (current):",),
            ("Listeners (current):", "4"),
        ]))
        assert extract_snapshot(parse_status_page(html), MOUNT) == ListenerSnapshot("", 4)

    def test_unparsable_listener_count_is_zero(self):
        html = _page(_mount_box(MOUNT, [("Listeners (current):", "n/a")]))
        assert extract_snapshot(parse_status_page(html), MOUNT).listener_count == 0

    def test_listener_count_reads_leading_digits(self):
        html = _page(_mount_box(MOUNT, [("Listeners (current):", "12 (peak 40)")]))
        assert extract_snapshot(parse_status_page(html), MOUNT).listener_count == 12


class TestIcecastStatusClient:
    def test_fetch_parses_page(self):
        html = _page(_mount_box(MOUNT, [("Currently playing:", "Artist - Song.mp3")]))
        http = FakeHttp({URL: FakeResponse(200, html)})
        snap = IcecastStatusClient(URL, MOUNT, session=http).fetch()
        assert snap.now_playing == "Artist - Song.mp3"
