'''
Use this module to run esrsoutline in py.test modes

See COPYRIGHT.md for copyright information.

Unit tests run on small in-memory taxonomies.  The integration tests load a real ESRS
taxonomy when its entry point (esrs_all.xsd, local path or url) is given:

    pytest tests/integration_tests --entrypoint=/path/to/esrs_set/esrs_all.xsd

'''


def pytest_addoption(parser):
    parser.addoption('--entrypoint', default=None,
                     help='ESRS taxonomy entry point for the integration tests (default skips them)')
    parser.addoption('--offline', action='store_true', default=False,
                     help='refuse remote taxonomy urls which are not mapped to local files')
