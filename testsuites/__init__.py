"""
Test suites and the Playwright UI framework they run on.

    testsuites/ui_testing/framework  settings, logging, browser cache, drivers
    testsuites/ui_testing/pages      page objects
    testsuites/ui_testing/steps      Given/When/Then step classes
    testsuites/ui_testing/tests      browser-driven tests (--run-ui)
    testsuites/unit                  framework tests against in-memory fakes
"""
