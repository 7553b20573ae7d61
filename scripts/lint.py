"""
Lint script runner.
"""
import subprocess

def main():
    """
    Lint the Mini-PL project using flake8 and pylint.
    """
    print("Running flake8...")
    subprocess.run([
        "flake8",
        "./minipl",
        "./mpl.py",
        "--exclude=minipl/tests",
        "--max-line-length=110",
    ], check=True)

    print("Running pylint...")
    subprocess.run([
        "pylint",
        "./minipl",
        "./mpl.py",
        "--ignore=tests",
    ], check=True)


if __name__ == "__main__":
    main()
