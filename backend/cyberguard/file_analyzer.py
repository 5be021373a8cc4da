"""
File Risk Analyzer
──────────────────
Judges a file from its name, declared size and declared MIME type only;
the content is never opened.
"""

from typing import Optional

from .rules import band_for

DANGEROUS_EXTENSIONS = frozenset({
    "exe", "msi", "bat", "sh", "cmd", "ps1", "vbs", "scr", "com", "pif",
})
SUSPICIOUS_EXTENSIONS = frozenset({
    "zip", "rar", "7z", "iso", "dmg", "js", "jar", "svg",
})
# Extensions a dangerous file typically pretends to be
DOCUMENT_EXTENSIONS = frozenset({
    "pdf", "doc", "docx", "xls", "xlsx", "txt", "jpg", "png",
})

LARGE_FILE_MB = 50

BANDS = ((80, "critical"), (50, "high"), (30, "medium"), (15, "low"), (0, "safe"))

BAND_TEXT = {
    "critical": (
        "This file is extremely dangerous. It is an executable program that could install malware, "
        "steal your data, or lock your computer.",
        "⚠️ DO NOT OPEN THIS FILE. Delete it immediately and do not run it.",
    ),
    "high": (
        "This file has high-risk characteristics. It might be a virus disguised as a normal document.",
        "Do not open this file unless you are 100% sure you know who sent it and why. "
        "Scan it with a dedicated antivirus.",
    ),
    "medium": (
        "This file type is often used to hide malware. While it might be safe, it requires caution.",
        "Only open if you expected this file. If it asks for special permissions, deny them.",
    ),
    "low": (
        "Minor suspicious indicators found, possibly due to the file type or size.",
        "Proceed with caution. Ensure your antivirus software is active.",
    ),
    "safe": (
        "No significant threat indicators were found for this file structure.",
        "This file appears safe to use.",
    ),
}


def _default_result() -> dict:
    return {
        "riskLevel": "safe",
        "fileCategory": "Document",
        "fileExtension": "unknown",
        "explanation": "This file appears to be a standard document and is likely safe.",
        "indicators": [],
        "recommendation": "You can safely open this file, but stay alert for any unusual behavior.",
    }


def analyze_file(file_name: Optional[str], file_size: Optional[float] = 0, file_type: Optional[str] = None) -> dict:
    """
    Classify a file by extension and naming tricks.

    Returns dict with:
        riskLevel, fileCategory, fileExtension, explanation, indicators, recommendation
    """
    result = _default_result()
    if not file_name:
        return result

    parts = file_name.split(".")
    extension = parts[-1].lower() if len(parts) > 1 else ""
    result["fileExtension"] = extension or "none"

    indicators: list = []
    score = 0

    if extension in DANGEROUS_EXTENSIONS:
        score += 80
        result["fileCategory"] = "Executable / Script"
        indicators.append(f"High-risk executable extension (.{extension}) detected")
    elif extension in SUSPICIOUS_EXTENSIONS:
        score += 40
        result["fileCategory"] = "Archive / Script"
        indicators.append(f"Potentially suspicious extension (.{extension}) detected")

    # e.g. invoice.pdf.exe
    if len(parts) > 2:
        second_last = parts[-2].lower()
        if second_last in DOCUMENT_EXTENSIONS and extension in DANGEROUS_EXTENSIONS:
            score += 50
            indicators.append(
                f"Double extension detected (trying to look like a .{second_last} while being an .{extension})"
            )

    size_mb = (file_size or 0) / (1024 * 1024)
    if size_mb > LARGE_FILE_MB:
        score += 10
        indicators.append("Unusually large file size for a simple document")

    if file_type and file_type.split("/")[0] == "image" and extension in DANGEROUS_EXTENSIONS:
        score += 40
        indicators.append("MIME type indicates an image, but the extension is executable (highly suspicious)")

    level = band_for(score, BANDS)
    result["riskLevel"] = level
    result["explanation"], result["recommendation"] = BAND_TEXT[level]
    result["indicators"] = indicators
    return result
