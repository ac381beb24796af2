"""FastAPI HTTP layer package.

The application lives in :mod:`faqproxy.api.app`::

    from faqproxy.api.app import app, create_app

    uvicorn faqproxy.api.app:app --reload

It is not re-exported here so that importing :mod:`faqproxy.api.guards`
(the CLI does) does not build the app and configure logging as a side effect.
"""
