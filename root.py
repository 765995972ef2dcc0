# FILE IS USED TO FIND THE PROJECT ROOT, DO NOT MOVE FROM ROOT DIRECTORY
from pathlib import Path

p = Path(__file__).resolve()


def get_project_root() -> Path:
    return Path(p.parent)


if __name__ == '__main__':
    print(get_project_root())
