"""Analysis domains: workforce data preparation plus attrition, performance and satisfaction."""
