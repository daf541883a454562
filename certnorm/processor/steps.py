from certnorm.chain.resolver import ChainResolver
from certnorm.logging.logger import Log
from certnorm.normalization.binary_decoder import BinaryDecoder
from certnorm.normalization.block_validator import BlockValidator
from certnorm.normalization.classifier import classify
from certnorm.normalization.metadata import extract_metadata
from certnorm.normalization.models import Classification
from certnorm.normalization.text_decoder import TextDecoder
from certnorm.processor.pipeline import NormalizationContext, PipelineStep
from certnorm.processor.upload_guard import UploadGuard


class AdmitUploadStep(PipelineStep):
    def __init__(self, guard: UploadGuard) -> None:
        self._guard = guard

    def run(self, context: NormalizationContext) -> NormalizationContext:
        self._guard.check(context.upload)
        Log.info(
            f"Accepted upload '{context.upload.filename}' ({len(context.upload.data)} bytes)"
        )
        return context


class ClassifyStep(PipelineStep):
    def run(self, context: NormalizationContext) -> NormalizationContext:
        context.classification = classify(context.upload.data)
        Log.info(f"Upload classified as {context.classification.value}")
        return context


class DecodeStep(PipelineStep):
    def __init__(self, binary_decoder: BinaryDecoder, text_decoder: TextDecoder) -> None:
        self._binary_decoder = binary_decoder
        self._text_decoder = text_decoder

    def run(self, context: NormalizationContext) -> NormalizationContext:
        if context.classification is None:
            raise ValueError("NormalizationContext.classification must be set before decoding")
        if context.classification is Classification.BINARY:
            context.candidate = self._binary_decoder.decode(context.upload.data)
        else:
            context.candidate = self._text_decoder.decode(context.upload.data)
        return context


class ValidateBlocksStep(PipelineStep):
    def __init__(self, validator: BlockValidator) -> None:
        self._validator = validator

    def run(self, context: NormalizationContext) -> NormalizationContext:
        if context.candidate is None:
            raise ValueError("NormalizationContext.candidate must be set before validation")
        context.bundle = self._validator.validate(context.candidate.text)
        return context


class ExtractMetadataStep(PipelineStep):
    def run(self, context: NormalizationContext) -> NormalizationContext:
        if context.bundle is None:
            raise ValueError("NormalizationContext.bundle must be set before metadata extraction")
        context.metadata = extract_metadata(context.bundle)
        Log.info(
            f"Leaf certificate '{context.metadata.common_name}' "
            f"status {context.metadata.status}"
        )
        return context


class ResolveChainStep(PipelineStep):
    def __init__(self, resolver: ChainResolver) -> None:
        self._resolver = resolver

    def run(self, context: NormalizationContext) -> NormalizationContext:
        if context.bundle is None:
            raise ValueError("NormalizationContext.bundle must be set before chain resolution")
        context.bundle, context.chain_attempt = self._resolver.resolve(context.bundle)
        return context
