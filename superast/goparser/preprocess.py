def preprocess_go(code: str) -> str:
    # BOM and CRLF only; anything that moves lines would break node positions
    if not code:
        return ""
    code = code.lstrip('\ufeff')
    return code.replace('\r\n', '\n')
