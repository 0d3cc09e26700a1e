from app.models.parameters import (
    ModelConfig,
    RatingWeights,
    NormalizationReference,
    DEFAULT_MODEL_CONFIG,
    load_model_config,
)
from app.models.normalizer import StatNormalizer, NormalizedFeatures, safe_ratio
from app.models.rating import RatingCalculator
from app.models.probability import ProbabilityModel
from app.models.nhl import NHLModel, MatchupProbabilities
