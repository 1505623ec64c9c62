from catalogue.descriptions.claude_writer import ClaudeDescriptionWriter
from catalogue.descriptions.template_writer import TemplateDescriptionWriter
from catalogue.descriptions.writer_port import DescriptionWriterPort

__all__ = ["ClaudeDescriptionWriter", "DescriptionWriterPort", "TemplateDescriptionWriter"]
