# Services package init
"""
LabRecords Backend — Services Layer
====================================

Service Inventory:
    - CrudService:     list / get / create / update / delete for any resource,
                       driven by a ResourcePolicy
    - AnalisisService: analyses policy + envelopes (hard delete, list filters)
    - UserService:     users policy + envelopes (soft delete, active-only list,
                       public profile on create)
"""
