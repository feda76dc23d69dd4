import html
import re


DEFAULT_DATE = '2016-01-01'
MIN_CONTENT_LENGTH = 20

MONTHS_EN = {
    'january': '01', 'february': '02', 'march': '03', 'april': '04',
    'may': '05', 'june': '06', 'july': '07', 'august': '08',
    'september': '09', 'october': '10', 'november': '11', 'december': '12',
}

MONTHS_FR = {
    'janvier': '01', 'février': '02', 'fevrier': '02', 'mars': '03',
    'avril': '04', 'mai': '05', 'juin': '06', 'juillet': '07',
    'août': '08', 'aout': '08', 'septembre': '09', 'octobre': '10',
    'novembre': '11', 'décembre': '12', 'decembre': '12',
}

RECOMMENDED_MARKERS = ('icon_thumbsUp', 'Recommended</a>', 'Recommandé</a>')

PLAYTIME_EN_PATTERN = re.compile(r'(\d+[,.]?\d*)\s*hrs?\s+on\s+record', re.IGNORECASE)
PLAYTIME_FR_PATTERN = re.compile(r'(\d+[,.]?\d*)\s*h[a-z]*\s+en\s+tout', re.IGNORECASE)

POSTED_BLOCK_PATTERN = re.compile(r'<div\s+class="posted"[^>]*>(.*?)</div>', re.IGNORECASE | re.DOTALL)
POSTED_EN_PATTERN = re.compile(r'Posted\s+(\d{1,2})\s+([a-z]+),?\s+(\d{4})', re.IGNORECASE)
POSTED_FR_PATTERN = re.compile(r'(\d{1,2})\s+([a-zûàéè]+)\s+(\d{4})', re.IGNORECASE)

CONTENT_STRICT_PATTERN = re.compile(r'<div\s+class="content\s*"[^>]*>(.*?)</div>', re.IGNORECASE | re.DOTALL)
CONTENT_LOOSE_PATTERN = re.compile(r'class="content[^"]*">(.+?)</div>', re.IGNORECASE | re.DOTALL)


class ReviewParsingHelper:
    """Field parsers applied to one review block of a profile listing page."""

    @classmethod
    def clean_text(cls, text):
        """Turn review markup into plain text with at most one blank line between paragraphs."""
        if not text:
            return ''
        text = html.unescape(text)
        text = re.sub(r'<br\s*/?>', '\n', text, flags=re.IGNORECASE)
        text = re.sub(r'<[^>]*>', '', text)
        text = re.sub(r'\n\s*\n\s*\n+', '\n\n', text)
        text = re.sub(r'[ \t]+', ' ', text)
        return text.strip()

    @classmethod
    def is_recommended(cls, block):
        return any(marker in block for marker in RECOMMENDED_MARKERS)

    @classmethod
    def parse_playtime(cls, block):
        # Example: "148.5 hrs on record" or "3,2 h en tout"
        match = PLAYTIME_EN_PATTERN.search(block) or PLAYTIME_FR_PATTERN.search(block)
        if match:
            return float(match.group(1).replace(',', '.'))
        return 0.0

    @classmethod
    def _format_date(cls, match, months):
        day = match.group(1).zfill(2)
        month = months.get(match.group(2).lower())
        if month is None or not 1 <= int(day) <= 31:
            return DEFAULT_DATE
        return f"{match.group(3)}-{month}-{day}"

    @classmethod
    def parse_posted_date(cls, text):
        """
        Parse the text of a "posted" div into YYYY-MM-DD.

        The English form ("Posted 5 January, 2021") wins whenever it matches;
        the French form ("5 février 2021") is only tried otherwise.
        """
        if not text:
            return DEFAULT_DATE
        match = POSTED_EN_PATTERN.search(text)
        if match:
            return cls._format_date(match, MONTHS_EN)
        match = POSTED_FR_PATTERN.search(text)
        if match:
            return cls._format_date(match, MONTHS_FR)
        return DEFAULT_DATE

    @classmethod
    def parse_block_date(cls, block):
        posted = POSTED_BLOCK_PATTERN.search(block)
        if not posted:
            return DEFAULT_DATE
        return cls.parse_posted_date(posted.group(1))

    @classmethod
    def extract_content(cls, block):
        content = ''
        match = CONTENT_STRICT_PATTERN.search(block)
        if match:
            content = cls.clean_text(match.group(1))

        # Some blocks carry extra classes on the content div
        if len(content) < MIN_CONTENT_LENGTH:
            match = CONTENT_LOOSE_PATTERN.search(block)
            if match:
                content = cls.clean_text(match.group(1))

        return content
