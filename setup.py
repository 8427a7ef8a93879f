from setuptools import setup, find_packages

def parse_requirements(filename):
    with open(filename, 'r') as f:
        return [line.strip() for line in f.readlines() \
                if line.strip() and not line.startswith("#")]

setup(
    name="netsketch",
    version="0.1.0",
    description="Turn FCN and CNN layer designs into PyTorch or Keras source code",
    packages=find_packages(include=['netsketch', 'netsketch.*']),
    python_requires=">=3.10",
    install_requires=parse_requirements('requirements.txt'),
    extras_require={
        'test': ['pytest>=7.0', 'torch>=2.0'],
    },
    entry_points={
        'console_scripts': ['netsketch=netsketch.cli_app:app'],
    },
)
