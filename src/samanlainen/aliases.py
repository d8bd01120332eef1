from samanlainen.core.models import HashAlgorithmType

ALGORITHM_ALIASES = {
    "sha512": HashAlgorithmType.SHA512,
    "xxh64": HashAlgorithmType.XXH64,
    "xxhash": HashAlgorithmType.XXH64,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Digest used for tail, head and full content hashing:\n"
    "  sha512       : SHA-512, cryptographic (default)\n"
    "  xxh64/xxhash : xxHash64, much faster, not collision resistant\n"
)

SIZE_HELP_TEXT = (
    "Sizes accept SI (k, M, G = powers of 1000) and binary (Ki, Mi, Gi = powers of 1024)\n"
    "suffixes, e.g. 500k, 10MB, 1MiB, 2GiB."
)

EPILOG_TEXT = """
Examples:
  List duplicates in Downloads without deleting anything (dry run)
  %(prog)s ~/Downloads

  Keep files found under ~/Photos over copies found under ~/Downloads, then delete
  %(prog)s ~/Photos ~/Downloads --delete-files

  Only files between 500 kB and 10 MB, move the duplicates to the trash
  %(prog)s ~/Downloads -m 500k -M 10M --delete-files --trash

  Report only groups of three or more identical files
  %(prog)s ~/Downloads -c 3
"""
