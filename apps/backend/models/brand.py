from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, List


class Palette(BaseModel):
    """Ranked brand colors derived from weighted page signals"""
    primary: str = Field(default="#000000", description="Highest-weighted entry, #000000 when empty")
    background: Optional[str] = Field(default=None, description="Converted body background, None if unparseable")
    entries: List[str] = Field(
        default_factory=list,
        serialization_alias="palette",
        description="Up to 8 uppercase #RRGGBB colors, descending by weight"
    )


class Typography(BaseModel):
    heading: str = Field(serialization_alias="headings")
    body: str


class ContentDigest(BaseModel):
    """Text summary handed to the vibe classifier"""
    heading: str = ""
    description: str = ""
    excerpt: str = ""

    @property
    def raw_text(self) -> str:
        # The classifier prompt embeds this verbatim; keep the labels stable
        return f"Heading: {self.heading}\nDescription: {self.description}\nContent: {self.excerpt}"


class VibeAnalysis(BaseModel):
    tone: str
    audience: str
    # Older prompts asked for "vibe"; accept either key
    summary: str = Field(validation_alias=AliasChoices("summary", "vibe"))


class BrandSignals(BaseModel):
    """Everything extracted from one page tree, before classification"""
    palette: Palette
    typography: Typography
    logo: Optional[str] = None
    digest: ContentDigest


class ExtractionResult(BaseModel):
    """Final /analyze payload"""
    colors: Palette
    typography: Typography
    logo: Optional[str] = None
    raw_text: str = Field(serialization_alias="rawText")
    vibe: VibeAnalysis

    @classmethod
    def from_signals(cls, signals: BrandSignals, vibe: VibeAnalysis) -> "ExtractionResult":
        return cls(
            colors=signals.palette,
            typography=signals.typography,
            logo=signals.logo,
            raw_text=signals.digest.raw_text,
            vibe=vibe,
        )
