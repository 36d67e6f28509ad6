from tests.fakes.fake_entities import OLD_DATE, make_branch, make_note
from tests.fakes.fake_options import FakeOptions

__all__ = ["FakeOptions", "OLD_DATE", "make_branch", "make_note"]
