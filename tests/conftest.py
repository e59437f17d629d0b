import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_rawtweet_logging():
    # The CLI installs a stderr handler bound to the (captured) stream of the test that ran it.
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "rawtweet":
            root.removeHandler(handler)
    logging.getLogger("rawtweet").setLevel(logging.NOTSET)
