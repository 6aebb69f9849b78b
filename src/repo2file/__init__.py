"""repo2file - turn a code repository into a single text file"""

__version__ = "0.1.0"
