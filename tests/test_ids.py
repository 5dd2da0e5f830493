"""Tests for IDGenerator."""

import threading

from python_docx_builder.ids import IDGenerator, IDKind, numeric_suffix


class TestIDGenerator:
    """Test ID generation per entity kind."""

    def test_ids_start_at_one(self) -> None:
        """Test that the first ID of a kind ends in 1."""
        ids = IDGenerator()
        assert ids.next_paragraph_id() == "para1"
        assert ids.next_run_id() == "run1"
        assert ids.next_relationship_id() == "rId1"
        assert ids.next_image_id() == "img1"

    def test_counters_are_independent(self) -> None:
        """Test that minting one kind does not advance another."""
        ids = IDGenerator()
        ids.next_paragraph_id()
        ids.next_paragraph_id()
        assert ids.next_table_id() == "tbl1"
        assert ids.next_paragraph_id() == "para3"

    def test_ids_are_monotonic(self) -> None:
        """Test that successive IDs never repeat."""
        ids = IDGenerator()
        minted = [ids.next_id(IDKind.CELL) for _ in range(50)]
        assert len(set(minted)) == 50
        assert minted[-1] == "cell50"

    def test_current_reports_last_value(self) -> None:
        """Test that current() is 0 before use and the last number after."""
        ids = IDGenerator()
        assert ids.current(IDKind.BOOKMARK) == 0
        ids.next_bookmark_id()
        assert ids.current(IDKind.BOOKMARK) == 1

    def test_reset(self) -> None:
        """Test that reset() zeroes every counter."""
        ids = IDGenerator()
        ids.next_paragraph_id()
        ids.next_shape_id()
        ids.reset()
        assert ids.next_paragraph_id() == "para1"
        assert ids.next_shape_id() == "shp1"


class TestAdvancePast:
    """Test advancing counters past existing IDs."""

    def test_advance_past_string_id(self) -> None:
        """Test that new IDs sort after an existing one."""
        ids = IDGenerator()
        ids.advance_past(IDKind.RELATIONSHIP, "rId7")
        assert ids.next_relationship_id() == "rId8"

    def test_advance_past_never_moves_backwards(self) -> None:
        """Test that a smaller ID leaves the counter alone."""
        ids = IDGenerator()
        ids.advance_past(IDKind.IMAGE, 5)
        ids.advance_past(IDKind.IMAGE, "img2")
        assert ids.next_image_id() == "img6"

    def test_advance_past_ignores_ids_without_number(self) -> None:
        """Test that IDs without a numeric suffix are ignored."""
        ids = IDGenerator()
        ids.advance_past(IDKind.HEADER, "header")
        assert ids.next_id(IDKind.HEADER) == "header1"


class TestNumericSuffix:
    """Test numeric_suffix()."""

    def test_trailing_digits(self) -> None:
        """Test extraction of the trailing integer."""
        assert numeric_suffix("rId12") == 12
        assert numeric_suffix("image3") == 3

    def test_no_digits(self) -> None:
        """Test that None is returned without a suffix."""
        assert numeric_suffix("Normal") is None


class TestConcurrency:
    """Test concurrent ID minting."""

    def test_concurrent_ids_are_unique(self) -> None:
        """Test that threads minting the same kind never collide."""
        ids = IDGenerator()
        minted: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            local = [ids.next_paragraph_id() for _ in range(200)]
            with lock:
                minted.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(minted) == 1600
        assert len(set(minted)) == 1600
        assert ids.current(IDKind.PARAGRAPH) == 1600
