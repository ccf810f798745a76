"""Provision the statistics schema configured through JOBSTATS_* variables."""

from src.jobstats.bootstrap import create_statistics_repository


def main() -> None:
    create_statistics_repository()
    print("Statistics schema initialized.")


if __name__ == "__main__":
    main()
