ERRORS = {
  "E_USAGE": "Wrong number of arguments",
  "E_INPUT_MISSING": "Input file does not exist",
  "E_DEX_MAGIC": "Input file is not a dex file",
  "E_HEADER_SHORT": "Input file is too small for a dex header",
  "E_IO": "Unable to read input or write output",
}

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_USAGE = 2
