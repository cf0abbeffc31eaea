"""Recommendation engine — turns a trip into three ranked resort picks.

Modules:
    config              LLM parameters and prompt limits
    context_assembler   Trip and guest records the pipeline works from
    prompt_builder      System prompt and sectioned user message
    output_parser       Two-stage JSON decode of the model reply
    enrichment          Catalog overrides and the per-guest flight summary
    aggregator          Runs the stages end to end and persists the result

Pipeline:
    TripStore.load_trip → SnowService → (lodging_optimizer ‖ FlightSearchService)
    → prompt_builder → LLMClient → output_parser → enrichment → TripStore.save_results
"""
