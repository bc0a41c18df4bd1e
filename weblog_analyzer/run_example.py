from .analyzer import LogAnalyzer
from .cli import print_report
from pathlib import Path


def main():
    here = Path(__file__).parent
    sample = here / "sample_logs" / "weblog.txt"
    analyzer = LogAnalyzer.from_file(str(sample))
    analyzer.aggregate()
    print_report(analyzer)


if __name__ == "__main__":
    main()
