from .extract import LeadRecord, build_lead_record, extract_collected_data, extract_lead

__all__ = ["LeadRecord", "build_lead_record", "extract_collected_data", "extract_lead"]
