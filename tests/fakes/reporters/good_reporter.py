class Reporter:
    def __init__(self) -> None:
        self.reports = []

    def pytest_runtest_logreport(self, report) -> None:  # type: ignore
        if report.when == "call":
            self.reports.append((report.nodeid, report.outcome))
            print(f"good_reporter: {report.nodeid} {report.outcome}")


class AnotherReporter(Reporter):
    pass
