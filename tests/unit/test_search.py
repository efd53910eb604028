from core.search import SearchIndex, matches

CATALOG = ("/a/X.mp3", "/a/Y.mp3", "/Yard/z.MP3")


class TestMatches:
    def test_empty_query_matches_nothing(self):
        assert matches("", CATALOG) == ()

    def test_case_insensitive_substring(self):
        assert matches("y", ("/a/X.mp3", "/a/Y.mp3")) == ("/a/Y.mp3",)

    def test_matches_full_path_not_only_basename(self):
        assert matches("yard", CATALOG) == ("/Yard/z.MP3",)

    def test_order_follows_catalog(self):
        assert matches(".mp3", CATALOG) == CATALOG

    def test_query_case_does_not_matter(self):
        assert matches("X.MP3", CATALOG) == matches("x.mp3", CATALOG) == ("/a/X.mp3",)

    def test_no_matches(self):
        assert matches("flac", CATALOG) == ()


class TestSearchIndex:
    def test_matches_follow_catalog_and_query(self):
        idx = SearchIndex()
        assert idx.set_query("x").matches == ()
        state = idx.set_catalog(CATALOG)
        assert state.query == "x"
        assert state.matches == ("/a/X.mp3",)
        assert idx.set_query("").matches == ()
