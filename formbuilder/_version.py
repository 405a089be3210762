__title__ = 'formbuilder'
__fulltitle__ = 'formbuilder'
__desc__ = 'Field type registry, option merging and label helpers for form builders'
__version__ = '0.1.0'
